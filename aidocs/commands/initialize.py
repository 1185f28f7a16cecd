"""The ``init`` command: create the docs branch and its worktree."""

from __future__ import annotations

import os
import shutil

import click

from aidocs import git
from aidocs.config import DEFAULT_CONFIG_PATH, Config, ConfigError, load_config
from aidocs.console import CommandError, Console, Options
from aidocs.fileutils import append_to_file, file_contains, path_exists

TOTAL_STEPS = 9
GITIGNORE_PATH = ".gitignore"

SCAFFOLDING_CONFIG = """\
userName: ""   # fallback git config user.name or whoami when userName is empty
mainBranchName: "main"

docBranchNameTemplate: "@ai-docs/{userName}"  # {userName} ↔ runtime replace
docWorktreeDir: ".ai-docs"

aIAgentMemoryContextPath:
  Cline: "memory-bank"
  Claude: "CLAUDE.md"
  Gemini: "GEMINI.md"
  Cursor: ".cursor/rules"

ignorePatterns:
  - "memory-bank"
  - "CLAUDE.md"
  - "GEMINI.md"
  - ".cursor"
"""


def create_scaffolding_config(path: str | os.PathLike[str]) -> None:
    """Write a sample configuration file to ``path``."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(SCAFFOLDING_CONFIG)


def _load(config_path: str) -> Config:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        raise CommandError(f"failed to load config: {exc}") from exc


def _remove_tree(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


def _check(cfg: Config, doc_branch: str, options: Options) -> None:
    if not git.branch_exists(cfg.main_branch_name):
        raise CommandError(f"main branch '{cfg.main_branch_name}' does not exist")

    if git.branch_exists(doc_branch) and not options.force:
        raise CommandError(
            f"doc branch '{doc_branch}' already exists (use --force to override)"
        )

    if path_exists(cfg.doc_worktree_dir):
        if not options.force:
            raise CommandError(
                f"worktree directory '{cfg.doc_worktree_dir}' already exists "
                "(use --force to override)"
            )
        try:
            git.run_git("", "worktree", "remove", "--force", cfg.doc_worktree_dir)
        except git.GitError as exc:
            raise CommandError(
                f"failed to remove worktree {cfg.doc_worktree_dir}: {exc}"
            ) from exc


def _create_orphan_branch(cfg: Config, doc_branch: str, options: Options,
                          console: Console) -> None:
    console.step(3, TOTAL_STEPS, f"Creating docs branch: {doc_branch}")
    if options.force and git.branch_exists(doc_branch):
        console.info(f"Deleting existing branch: {doc_branch}")
        try:
            git.run_git("", "branch", "-D", doc_branch)
        except git.GitError as exc:
            raise CommandError(f"failed to delete existing branch: {exc}") from exc

    try:
        git.run_git("", "checkout", "--orphan", doc_branch)
    except git.GitError as exc:
        raise CommandError(f"failed to create orphan branch: {exc}") from exc
    try:
        git.run_git("", "reset")
    except git.GitError as exc:
        raise CommandError(f"failed to reset orphan branch: {exc}") from exc

    console.step(4, TOTAL_STEPS, "Validating branch switch")
    try:
        now_on = git.current_branch()
    except git.GitError as exc:
        raise CommandError(
            f"failed to confirm current branch after switch: {exc}"
        ) from exc
    if now_on != doc_branch:
        raise CommandError(
            f"not on expected orphan branch '{doc_branch}' (got '{now_on}')"
        )
    console.success(f"Successfully switched to orphan branch: {doc_branch}")


def _initial_commit(cfg: Config, doc_branch: str, console: Console) -> None:
    console.step(5, TOTAL_STEPS, "Creating initial commit")
    for path in cfg.ai_agent_memory_context_path.values():
        if not path_exists(path):
            console.info(f"Skipped (not found): {path}")
            continue
        try:
            git.run_git("", "add", "-f", path)
        except git.GitError as exc:
            console.warning(f"Failed to stage {path}: {exc}")
        else:
            console.info(f"Staged: {path}")

    try:
        git.run_git("", "commit", "-m", "Initial AI docs commit", "--allow-empty")
    except git.GitError as exc:
        raise CommandError(f"failed to create commit: {exc}") from exc

    try:
        git.push_with_retry("", doc_branch, 3)
    except git.GitError as exc:
        console.warning(f"Failed to push branch: {exc}")
    else:
        console.success("Pushed branch to origin")


def _return_to_main(cfg: Config, previous_branch: str, console: Console) -> None:
    console.step(6, TOTAL_STEPS, "Returning to main branch")
    try:
        git.run_git("", "switch", "-f", cfg.main_branch_name)
    except git.GitError:
        try:
            git.run_git("", "switch", previous_branch)
        except git.GitError as exc:
            raise CommandError(f"failed to return to branch: {exc}") from exc


def _update_gitignore(cfg: Config, console: Console) -> None:
    console.step(7, TOTAL_STEPS, "Updating .gitignore")
    for pattern in [*cfg.ignore_patterns, cfg.doc_worktree_dir]:
        if file_contains(GITIGNORE_PATH, pattern):
            continue
        try:
            append_to_file(GITIGNORE_PATH, [pattern])
        except OSError as exc:
            console.warning(f"Failed to add {pattern} to .gitignore: {exc}")
        else:
            console.info(f"Added to .gitignore: {pattern}")


def _add_worktree(cfg: Config, doc_branch: str, options: Options,
                  console: Console) -> None:
    console.step(8, TOTAL_STEPS, "Adding worktree")
    if options.force and path_exists(cfg.doc_worktree_dir):
        console.info("Removing existing worktree")
        try:
            git.run_git("", "worktree", "remove", "-f", cfg.doc_worktree_dir)
        except git.GitError:
            try:
                _remove_tree(cfg.doc_worktree_dir)
            except OSError as exc:
                raise CommandError(f"failed to remove worktree {exc}") from exc

    try:
        git.run_git("", "worktree", "add", cfg.doc_worktree_dir, doc_branch)
    except git.GitError as exc:
        raise CommandError(f"failed to add worktree: {exc}") from exc
    console.success(f"Added worktree at {cfg.doc_worktree_dir}")


def run_init(options: Options, console: Console) -> None:
    """Create the orphan docs branch, commit the memory files and add the worktree."""
    if not git.is_git_repo():
        raise CommandError("not a git repository")

    console.step(1, TOTAL_STEPS, "Reading configuration")
    config_path = options.config_path or DEFAULT_CONFIG_PATH

    if not path_exists(config_path):
        console.warning(f"Config file not found at: {config_path}")
        try:
            create_scaffolding_config(config_path)
        except OSError as exc:
            raise CommandError(f"failed to create config file: {exc}") from exc
        console.success(f"Created sample config file: {config_path}")
        click.echo(
            "\nPlease review and edit the configuration file, "
            "then run 'ai-docs init' again.",
            file=console.stream,
        )
        return

    cfg = _load(config_path)
    console.info(f"Loaded config from: {config_path}")

    doc_branch = cfg.doc_branch_name()
    console.info(f"Doc branch: {doc_branch}")
    console.info(f"Worktree dir: {cfg.doc_worktree_dir}")

    console.step(2, TOTAL_STEPS, "Performing checks")
    _check(cfg, doc_branch, options)

    try:
        previous_branch = git.current_branch()
    except git.GitError as exc:
        raise CommandError(f"failed to get current branch: {exc}") from exc

    if options.dry_run:
        console.warning("Dry run mode - no changes will be made")
        return

    _create_orphan_branch(cfg, doc_branch, options, console)
    _initial_commit(cfg, doc_branch, console)
    _return_to_main(cfg, previous_branch, console)
    _update_gitignore(cfg, console)
    _add_worktree(cfg, doc_branch, options, console)

    console.step(9, TOTAL_STEPS, "Initialization complete")
    console.success("AI docs initialized successfully!")
    click.echo(
        "\nNext steps:\n"
        "  - Edit AI memory files in the symlinked directories\n"
        "  - Run 'ai-docs push' to commit and push changes\n"
        "  - Run 'ai-docs pull' to get latest changes from remote",
        file=console.stream,
    )