"""The ``push`` command: copy local memory files to the docs branch and push it."""

from __future__ import annotations

import os
from datetime import datetime

from aidocs import git
from aidocs.config import Config, ConfigError, load_config
from aidocs.console import CommandError, Console, Options
from aidocs.fileutils import copy_path, path_exists

TOTAL_STEPS = 6
PUSH_ATTEMPTS = 3


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


def _copy_to_worktree(cfg: Config, console: Console) -> None:
    copied = 0
    skipped = 0
    for path in cfg.ai_agent_memory_context_path.values():
        src = os.path.normpath(path)
        dst = os.path.join(cfg.doc_worktree_dir, path)

        if not path_exists(src):
            console.info(f"Source path does not exist: {src} (skipping)")
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

    console.info(f"Files copied: {copied}, skipped: {skipped}")


def run_push(options: Options, console: Console) -> None:
    """Copy memory files into the worktree, commit them and push the docs branch."""
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

    console.step(3, TOTAL_STEPS, "Copying files to worktree")
    _copy_to_worktree(cfg, console)

    console.step(4, TOTAL_STEPS, "Staging changes")
    try:
        git.run_git(cfg.doc_worktree_dir, "add", "-A")
    except git.GitError as exc:
        raise CommandError(f"failed to stage changes: {exc}") from exc

    if not git.has_uncommitted_changes(cfg.doc_worktree_dir):
        console.info("No changes to commit")
        return

    console.step(5, TOTAL_STEPS, "Creating commit")
    message = f"Update AI docs {datetime.now().strftime('%Y-%m-%d_%H:%M:%S')}"
    try:
        git.run_git(cfg.doc_worktree_dir, "commit", "-m", message)
    except git.GitError as exc:
        raise CommandError(f"failed to commit: {exc}") from exc
    console.success(f"Created commit: {message}")

    console.step(6, TOTAL_STEPS, "Pushing to remote")
    try:
        git.push_with_retry(cfg.doc_worktree_dir, doc_branch, PUSH_ATTEMPTS)
    except git.GitError as exc:
        raise CommandError(f"failed to push: {exc}") from exc
    console.success(f"Pushed changes to origin/{doc_branch}")