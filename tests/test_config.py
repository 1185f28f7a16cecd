import json
import subprocess

import pytest

from aidocs import config as config_module
from aidocs.config import Config, ConfigError, git_user_name, load_config


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_yaml_overrides_and_defaults(tmp_path):
    path = _write(
        tmp_path / "cfg.yml",
        "userName: alice\n"
        "mainBranchName: develop\n"
        "docWorktreeDir: .ai-docs\n"
        "ignorePatterns:\n"
        "  - CLAUDE.md\n"
        "  - memory-bank\n",
    )
    cfg = load_config(path)
    assert cfg.user_name == "alice"
    assert cfg.main_branch_name == "develop"
    assert cfg.doc_worktree_dir == ".ai-docs"
    assert cfg.ignore_patterns == ["CLAUDE.md", "memory-bank"]
    assert cfg.doc_branch_name_template == "@doc/{userName}"
    assert cfg.doc_dir == "docs/ai"


def test_yaml_context_paths_merge_with_defaults(tmp_path):
    path = _write(
        tmp_path / "cfg.yaml",
        "userName: alice\naIAgentMemoryContextPath:\n  Claude: CLAUDE.md\n",
    )
    cfg = load_config(path)
    assert cfg.ai_agent_memory_context_path["Claude"] == "CLAUDE.md"
    assert cfg.ai_agent_memory_context_path["Cline"] == "memory-bank"
    assert cfg.ai_agent_memory_context_path["Cursor"] == ".cursor/rules"


def test_json_config(tmp_path):
    document = {"userName": "bob", "docBranchNameTemplate": "docs/{userName}", "docDir": "notes"}
    path = _write(tmp_path / "cfg.json", json.dumps(document))
    cfg = load_config(path)
    assert cfg.user_name == "bob"
    assert cfg.doc_branch_name_template == "docs/{userName}"
    assert cfg.doc_dir == "notes"
    assert cfg.main_branch_name == "main"


def test_toml_config(tmp_path):
    path = _write(
        tmp_path / "cfg.toml",
        'userName = "carol"\nignorePatterns = ["a", "b"]\n'
        '[aIAgentMemoryContextPath]\nGemini = "GEMINI.md"\n',
    )
    cfg = load_config(path)
    assert cfg.user_name == "carol"
    assert cfg.ignore_patterns == ["a", "b"]
    assert cfg.ai_agent_memory_context_path["Gemini"] == "GEMINI.md"


def test_doc_branch_name_replaces_placeholder():
    cfg = Config(user_name="alice", doc_branch_name_template="@ai-docs/{userName}")
    assert cfg.doc_branch_name() == "@ai-docs/alice"


def test_doc_branch_name_without_placeholder_is_unchanged():
    cfg = Config(user_name="alice", doc_branch_name_template="shared-docs")
    assert cfg.doc_branch_name() == "shared-docs"


def test_unsupported_extension(tmp_path):
    path = _write(tmp_path / "cfg.ini", "userName=alice\n")
    with pytest.raises(ConfigError, match="unsupported config file format: .ini"):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="failed to read config file"):
        load_config(tmp_path / "absent.yml")


def test_invalid_yaml(tmp_path):
    path = _write(tmp_path / "cfg.yml", "userName: [unclosed\n")
    with pytest.raises(ConfigError, match="failed to parse config file"):
        load_config(path)


def test_wrong_type_is_parse_error(tmp_path):
    path = _write(tmp_path / "cfg.json", json.dumps({"userName": "x", "mainBranchName": 5}))
    with pytest.raises(ConfigError, match="failed to parse config file"):
        load_config(path)


def test_default_path_used_when_empty(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / ".ai-docs.config.yml", "userName: dave\n")
    cfg = load_config("")
    assert cfg.user_name == "dave"


def test_empty_user_name_falls_back_to_git(tmp_path, monkeypatch):
    def fake_run(command, **kwargs):
        return subprocess.CompletedProcess(command, 0, "Jane Doe\n", "")

    monkeypatch.setattr(config_module.subprocess, "run", fake_run)
    path = _write(tmp_path / "cfg.yml", 'userName: ""\n')
    cfg = load_config(path)
    assert cfg.user_name == "Jane Doe"


def test_git_user_name_falls_back_to_whoami(monkeypatch):
    def fake_run(command, **kwargs):
        if command[0] == "git":
            return subprocess.CompletedProcess(command, 1, "", "")
        return subprocess.CompletedProcess(command, 0, "bob\n", "")

    monkeypatch.setattr(config_module.subprocess, "run", fake_run)
    assert git_user_name() == "bob"


def test_git_user_name_last_resort(monkeypatch):
    def fake_run(command, **kwargs):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(config_module.subprocess, "run", fake_run)
    assert git_user_name() == "user"