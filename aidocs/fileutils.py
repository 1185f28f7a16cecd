"""File system helpers: copying, symlinks and line-oriented edits."""

from __future__ import annotations

import os
import shutil
import stat
import subprocess
import sys
from collections.abc import Iterable

StrPath = str | os.PathLike[str]


def file_contains(path: StrPath, line: str) -> bool:
    """Whether the file has a line equal to ``line``, ignoring surrounding whitespace."""
    wanted = line.strip()
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return any(existing.strip() == wanted for existing in handle)
    except OSError:
        return False


def append_to_file(path: StrPath, lines: Iterable[str]) -> None:
    """Append each line, newline-terminated, creating the file if needed."""
    with open(path, "a", encoding="utf-8") as handle:
        for line in lines:
            handle.write(line + "\n")


def _remove_all(path: StrPath) -> None:
    if os.path.islink(path) or not os.path.isdir(path):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
    else:
        shutil.rmtree(path)


def _make_link(link_path: StrPath, target: StrPath) -> None:
    if sys.platform == "win32":
        try:
            subprocess.run(
                ["cmd", "/c", "mklink", "/J", os.fspath(link_path), os.fspath(target)],
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise OSError(
                f"failed to create junction (mklink /J {link_path} {target}): {exc}"
            ) from exc
        return
    try:
        os.symlink(target, link_path)
    except OSError as exc:
        raise OSError(f"failed to create symlink from {link_path} to {target}: {exc}") from exc


def ensure_symlink(link_path: StrPath, target: StrPath) -> None:
    """Point ``link_path`` at ``target``, replacing a file or link already there."""
    if os.path.lexists(link_path):
        try:
            os.remove(link_path)
        except OSError as exc:
            raise OSError(f"fail to remove {link_path}") from exc
    _make_link(link_path, target)


def ensure_symlink_if_exists(link_path: StrPath, target: StrPath) -> None:
    """Replace an existing ``link_path`` with a link to ``target``; do nothing if absent."""
    if not os.path.lexists(link_path):
        return
    try:
        _remove_all(link_path)
    except OSError as exc:
        raise OSError(f"failed to remove existing path at {link_path}: {exc}") from exc
    _make_link(link_path, target)


def _copy_file(src: StrPath, dst: StrPath) -> None:
    with open(src, "rb") as source, open(dst, "wb") as destination:
        shutil.copyfileobj(source, destination)


def _copy_tree(src: str, dst: str) -> None:
    os.makedirs(dst, mode=stat.S_IMODE(os.stat(src).st_mode), exist_ok=True)
    with os.scandir(src) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        target = os.path.join(dst, entry.name)
        if entry.is_dir(follow_symlinks=False):
            _copy_tree(entry.path, target)
        else:
            _copy_file(entry.path, target)


def copy_dir(src: StrPath, dst: StrPath) -> None:
    """Copy a directory tree into ``dst``, overwriting files that exist."""
    _copy_tree(os.fspath(src), os.fspath(dst))


def copy_path(src: StrPath, dst: StrPath) -> None:
    """Copy a file or a directory tree."""
    if os.path.isdir(src):
        copy_dir(src, dst)
    else:
        os.stat(src)
        _copy_file(src, dst)


def path_exists(path: StrPath) -> bool:
    """Whether the path exists, following symlinks."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def clean_all_except_ai_paths(allowed_paths: Iterable[StrPath]) -> None:
    """Remove everything in the current directory except ``.git`` and the allowed paths."""
    keep = {os.path.abspath(path) for path in allowed_paths}
    keep.add(os.path.abspath(".git"))

    try:
        names = sorted(os.listdir("."))
    except OSError as exc:
        raise OSError(f"failed to read current directory: {exc}") from exc

    for name in names:
        if os.path.abspath(name) in keep:
            continue
        try:
            _remove_all(name)
        except OSError as exc:
            print(f"[warn] failed to remove {name}: {exc}", file=sys.stderr)
        else:
            print(f"[info] removed: {name}")