"""The ``pull`` command: bring the docs branch contents into the project."""

from __future__ import annotations

import os

import click

from aidocs import git
from aidocs.config import Config, ConfigError, load_config
from aidocs.console import CommandError, Console, Options
from aidocs.fileutils import copy_path, path_exists

TOTAL_STEPS = 5


def _load(config_path: str) -> Config:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        raise CommandError(f"failed to load config: {exc}") from exc


def _validate(cfg: Config, doc_branch: str) -> None:
    if not path_exists(cfg.doc_worktree_dir):
        raise CommandError(
            f"worktree directory '{cfg.doc_worktree_dir}' does not exist "
            "- run 'ai-docs init' first"
        )
    if not git.branch_exists(doc_branch):
        raise CommandError(
            f"doc branch '{doc_branch}' does not exist - run 'ai-docs init' first"
        )


def run_pull(options: Options, console: Console, overwrite: bool = False) -> None:
    """Pull the docs branch and copy its memory files into the working directory."""
    if not git.is_git_repo():
        raise CommandError("not a git repository")

    console.step(1, TOTAL_STEPS, "Loading configuration")
    cfg = _load(options.config_path)

    doc_branch = cfg.doc_branch_name()
    console.info(f"Doc branch: {doc_branch}")
    console.info(f"Worktree dir: {cfg.doc_worktree_dir}")

    console.step(2, TOTAL_STEPS, "Validating worktree")
    _validate(cfg, doc_branch)

    if options.dry_run:
        console.warning("Dry run mode - no changes will be made")
        return

    console.step(3, TOTAL_STEPS, "Pulling from remote")
    console.info(f"Pulling latest changes from origin/{doc_branch}")
    try:
        git.run_git(cfg.doc_worktree_dir, "pull", "--quiet")
    except git.GitError as exc:
        console.warning(f"Pull failed (may be normal for new branches): {exc}")
    else:
        console.success("Successfully pulled latest changes")

    console.step(4, TOTAL_STEPS, "Copying files to local")
    copied = 0
    skipped = 0
    for path in cfg.ai_agent_memory_context_path.values():
        src = os.path.join(cfg.doc_worktree_dir, path)
        dst = os.path.normpath(path)

        if not path_exists(src):
            console.info(f"Remote file does not exist: {path} (skipping)")
            skipped += 1
            continue

        if path_exists(dst) and not overwrite:
            console.warning(f"Local file exists: {dst} (use --overwrite to replace)")
            skipped += 1
            continue

        try:
            copy_path(src, dst)
        except OSError as exc:
            console.warning(f"Failed to copy {src} → {dst}: {exc}")
            skipped += 1
        else:
            console.success(f"Copied: {path}")
            copied += 1

    console.step(5, TOTAL_STEPS, "Pull complete")
    console.info(f"Files copied: {copied}, skipped: {skipped}")

    if skipped and not overwrite:
        click.echo("\nUse --overwrite flag to replace existing local files", file=console.stream)