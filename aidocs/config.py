"""Loading of the project configuration file."""

from __future__ import annotations

import json
import os
import subprocess
import tomllib
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = ".ai-docs.config.yml"
USER_NAME_PLACEHOLDER = "{userName}"


class ConfigError(Exception):
    """Raised when the configuration cannot be read or parsed."""


def _default_context_paths() -> dict[str, str]:
    return {
        "Cline": "memory-bank",
        "Claude": ".ai-memory",
        "Gemini": ".gemini/context",
        "Cursor": ".cursor/rules",
    }


def _default_ignore_patterns() -> list[str]:
    return [
        "/memory-bank/",
        "/.ai-memory/",
        "/.gemini/context/",
        "/.cursor/rules/",
    ]


@dataclass
class Config:
    """Settings that control where AI memory files live and how they are synced."""

    user_name: str = ""
    main_branch_name: str = "main"
    doc_branch_name_template: str = "@doc/{userName}"
    doc_worktree_dir: str = ".mem"
    ai_agent_memory_context_path: dict[str, str] = field(default_factory=_default_context_paths)
    ignore_patterns: list[str] = field(default_factory=_default_ignore_patterns)
    doc_dir: str = "docs/ai"

    def doc_branch_name(self) -> str:
        """The docs branch name with the user name filled in."""
        return self.doc_branch_name_template.replace(USER_NAME_PLACEHOLDER, self.user_name)


_STRING_KEYS = {
    "userName": "user_name",
    "mainBranchName": "main_branch_name",
    "docBranchNameTemplate": "doc_branch_name_template",
    "docWorktreeDir": "doc_worktree_dir",
    "docDir": "doc_dir",
}
_MAP_KEY = "aIAgentMemoryContextPath"
_LIST_KEY = "ignorePatterns"


def _extension(path: str) -> str:
    name = os.path.basename(path)
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def _parse(data: bytes, ext: str) -> Any:
    match ext:
        case ".yml" | ".yaml":
            return yaml.safe_load(data)
        case ".json":
            return json.loads(data)
        case ".toml":
            return tomllib.loads(data.decode("utf-8"))
    raise ConfigError(f"unsupported config file format: {ext}")


def _apply(cfg: Config, document: Any) -> None:
    if document is None:
        return
    if not isinstance(document, dict):
        raise ValueError("config document must be a mapping")

    for key, attr in _STRING_KEYS.items():
        value = document.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        setattr(cfg, attr, value)

    paths = document.get(_MAP_KEY)
    if paths is not None:
        if not isinstance(paths, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in paths.items()
        ):
            raise ValueError(f"{_MAP_KEY} must map names to strings")
        cfg.ai_agent_memory_context_path.update(paths)

    patterns = document.get(_LIST_KEY)
    if patterns is not None:
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ValueError(f"{_LIST_KEY} must be a list of strings")
        cfg.ignore_patterns = list(patterns)


def load_config(config_path: str | os.PathLike[str] = "") -> Config:
    """Read a YAML, JSON or TOML config file over the built-in defaults."""
    path = os.fspath(config_path) or DEFAULT_CONFIG_PATH

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ConfigError(f"failed to read config file: {exc}") from exc

    ext = _extension(path)
    cfg = Config()
    try:
        _apply(cfg, _parse(data, ext))
    except ConfigError:
        raise
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError,
            UnicodeDecodeError, ValueError) as exc:
        raise ConfigError(f"failed to parse config file: {exc}") from exc

    if not cfg.user_name:
        cfg.user_name = git_user_name()
    return cfg


def _command_output(command: list[str]) -> str | None:
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return (result.stdout or "").strip() or None


def git_user_name() -> str:
    """The git user name, else the login name, else "user"."""
    return _command_output(["git", "config", "user.name"]) or _command_output(["whoami"]) or "user"