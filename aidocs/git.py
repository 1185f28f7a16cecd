"""Thin helpers around the git command line."""

from __future__ import annotations

import os
import subprocess
import time

StrPath = str | os.PathLike[str]


class GitError(Exception):
    """Raised when a git command fails."""


def _cwd(directory: StrPath | None) -> StrPath | None:
    return directory or None


def _describe(args: tuple[str, ...]) -> str:
    return "git " + " ".join(args)


def run_git(directory: StrPath | None, *args: str) -> None:
    """Run git in ``directory`` (the current one if empty), raising GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=_cwd(directory),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitError(f"{_describe(args)} failed: {exc}\nstderr: ") from exc
    if result.returncode != 0:
        raise GitError(
            f"{_describe(args)} failed: exit status {result.returncode}\n"
            f"stderr: {result.stderr or ''}"
        )


def run_git_output(directory: StrPath | None, *args: str) -> str:
    """Run git and return its combined output, stripped."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=_cwd(directory),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitError(f"{_describe(args)} failed: {exc}\noutput: ") from exc
    output = result.stdout or ""
    if result.returncode != 0:
        raise GitError(
            f"{_describe(args)} failed: exit status {result.returncode}\noutput: {output}"
        )
    return output.strip()


def branch_exists(branch: str) -> bool:
    """Whether ``branch`` resolves to a commit."""
    try:
        run_git_output("", "rev-parse", "--verify", branch)
    except GitError:
        return False
    return True


def current_branch() -> str:
    """The name of the checked-out branch."""
    return run_git_output("", "branch", "--show-current")


def push_with_retry(directory: StrPath | None, branch: str, max_retries: int) -> None:
    """Push ``branch`` to origin, waiting one more second before each retry."""
    last_error: GitError | None = None
    for attempt in range(max_retries):
        if attempt > 0:
            time.sleep(attempt)
        try:
            run_git(directory, "push", "origin", branch)
        except GitError as exc:
            last_error = exc
        else:
            return
    raise GitError(f"push failed after {max_retries} retries: {last_error}") from last_error


def is_git_repo() -> bool:
    """Whether the current directory has a ``.git`` entry."""
    return os.path.exists(".git")


def has_uncommitted_changes(directory: StrPath | None) -> bool:
    """Whether ``git status --porcelain`` reports anything; False if git fails."""
    try:
        return run_git_output(directory, "status", "--porcelain") != ""
    except GitError:
        return False