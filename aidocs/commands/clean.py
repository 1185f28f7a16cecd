"""The ``clean`` command: remove the docs worktree and branch."""

from __future__ import annotations

import os
import shutil
import sys
from typing import TextIO

import click

from aidocs import git
from aidocs.config import Config, ConfigError, load_config
from aidocs.console import CommandError, Console, Options
from aidocs.fileutils import path_exists


def _load(config_path: str) -> Config:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        raise CommandError(f"failed to load config: {exc}") from exc


def _confirmed(cfg: Config, doc_branch: str, console: Console,
               input_stream: TextIO) -> bool:
    click.echo(
        f"This will remove the worktree at '{cfg.doc_worktree_dir}' "
        f"and the branch '{doc_branch}'.",
        file=console.stream,
    )
    click.echo("Are you sure? (y/N): ", nl=False, file=console.stream)

    try:
        response = input_stream.readline()
    except OSError as exc:
        raise CommandError(f"failed to read response: {exc}") from exc
    if not response.endswith("\n"):
        raise CommandError("failed to read response: EOF")

    return response.strip().lower() in ("y", "yes")


def _remove_tree(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


def _remove_symlinks(cfg: Config, console: Console) -> None:
    for path in cfg.ai_agent_memory_context_path.values():
        if not os.path.islink(path):
            continue
        console.info(f"Removing symlink: {path}")
        try:
            os.remove(path)
        except OSError as exc:
            console.warning(f"Failed to remove symlink {path}: {exc}")


def _remove_worktree(cfg: Config, console: Console) -> None:
    worktree = cfg.doc_worktree_dir
    if not path_exists(worktree):
        console.info("Worktree directory does not exist")
        return

    console.info(f"Removing worktree: {worktree}")
    try:
        git.run_git("", "worktree", "remove", "-f", worktree)
    except git.GitError as exc:
        console.warning(f"Git worktree remove failed: {exc}")
        console.info("Attempting manual removal")
        try:
            _remove_tree(worktree)
        except OSError as remove_exc:
            raise CommandError(
                f"failed to remove worktree directory: {remove_exc}"
            ) from remove_exc
    console.success("Removed worktree")


def _delete_branch(cfg: Config, doc_branch: str, console: Console) -> None:
    if not git.branch_exists(doc_branch):
        console.info("Branch does not exist")
        return

    try:
        on_branch = git.current_branch()
    except git.GitError:
        on_branch = None
    if on_branch == doc_branch:
        console.info("Switching away from doc branch")
        try:
            git.run_git("", "switch", cfg.main_branch_name)
        except git.GitError as exc:
            raise CommandError(f"failed to switch branch: {exc}") from exc

    console.info(f"Deleting branch: {doc_branch}")
    try:
        git.run_git("", "branch", "-D", doc_branch)
    except git.GitError as exc:
        raise CommandError(f"failed to delete branch: {exc}") from exc
    console.success("Deleted branch")

    console.info("Deleting remote branch")
    try:
        git.run_git("", "push", "origin", "--delete", doc_branch)
    except git.GitError as exc:
        console.warning(f"Failed to delete remote branch: {exc}")
    else:
        console.success("Deleted remote branch")


def run_clean(options: Options, console: Console,
              input_stream: TextIO | None = None) -> None:
    """Remove the docs worktree, the memory symlinks and the docs branch."""
    if not git.is_git_repo():
        raise CommandError("not a git repository")

    cfg = _load(options.config_path)
    doc_branch = cfg.doc_branch_name()

    if not options.force:
        stream = input_stream if input_stream is not None else sys.stdin
        if not _confirmed(cfg, doc_branch, console, stream):
            click.echo("Clean cancelled", file=console.stream)
            return

    if options.dry_run:
        console.warning("Dry run mode - showing what would be done")
        click.echo(f"Would remove worktree: {cfg.doc_worktree_dir}", file=console.stream)
        click.echo(f"Would delete branch: {doc_branch}", file=console.stream)
        return

    _remove_symlinks(cfg, console)
    _remove_worktree(cfg, console)
    _delete_branch(cfg, doc_branch, console)

    console.success("Clean completed successfully!")