"""Keep AI agent memory files on a dedicated Git branch and worktree."""

__version__ = "0.1.0"