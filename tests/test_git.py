import subprocess

import pytest

from aidocs import git
from aidocs.git import (
    GitError,
    branch_exists,
    current_branch,
    has_uncommitted_changes,
    is_git_repo,
    push_with_retry,
    run_git,
    run_git_output,
)


class FakeRun:
    """Records calls and replays scripted results."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append((command, kwargs))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        returncode, stdout, stderr = result
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)


@pytest.fixture
def fake_run(monkeypatch):
    def install(*results):
        fake = FakeRun(*results)
        monkeypatch.setattr(git.subprocess, "run", fake)
        return fake

    return install


def test_run_git_success_uses_current_dir(fake_run):
    fake = fake_run((0, None, ""))
    assert run_git("", "status") is None
    command, kwargs = fake.calls[0]
    assert command == ["git", "status"]
    assert kwargs["cwd"] is None


def test_run_git_passes_directory(fake_run):
    fake = fake_run((0, None, ""))
    assert run_git(".ai-docs", "add", "-A") is None
    command, kwargs = fake.calls[0]
    assert command == ["git", "add", "-A"]
    assert kwargs["cwd"] == ".ai-docs"


def test_run_git_failure_reports_command_and_stderr(fake_run):
    fake_run((1, None, "rejected by remote"))
    with pytest.raises(GitError) as info:
        run_git("", "push", "origin", "main")
    message = str(info.value)
    assert "git push origin main failed" in message
    assert "rejected by remote" in message


def test_run_git_missing_executable(fake_run):
    fake_run(FileNotFoundError("git"))
    with pytest.raises(GitError, match="git status failed"):
        run_git("", "status")


def test_run_git_output_strips(fake_run):
    fake_run((0, "  feature/x\n", None))
    assert run_git_output("", "branch", "--show-current") == "feature/x"


def test_run_git_output_failure_includes_output(fake_run):
    fake_run((128, "fatal: not a git repository", None))
    with pytest.raises(GitError, match="fatal: not a git repository"):
        run_git_output("", "status")


def test_branch_exists(fake_run):
    fake = fake_run((0, "abc123\n", None))
    assert branch_exists("main") is True
    assert fake.calls[0][0] == ["git", "rev-parse", "--verify", "main"]


def test_branch_missing(fake_run):
    fake_run((128, "fatal: Needed a single revision", None))
    assert branch_exists("nope") is False


def test_current_branch(fake_run):
    fake = fake_run((0, "@doc/alice\n", None))
    assert current_branch() == "@doc/alice"
    assert fake.calls[0][0] == ["git", "branch", "--show-current"]


def test_push_with_retry_succeeds_after_failures(fake_run, monkeypatch):
    sleeps = []
    monkeypatch.setattr(git.time, "sleep", sleeps.append)
    fake = fake_run((1, None, "e1"), (1, None, "e2"), (0, None, ""))
    assert push_with_retry("wt", "docs", 3) is None
    assert len(fake.calls) == 3
    assert sleeps == [1, 2]
    assert all(call[0] == ["git", "push", "origin", "docs"] for call in fake.calls)


def test_push_with_retry_gives_up(fake_run, monkeypatch):
    monkeypatch.setattr(git.time, "sleep", lambda seconds: None)
    fake = fake_run((1, None, "denied"))
    with pytest.raises(GitError) as info:
        push_with_retry("", "docs", 3)
    assert "push failed after 3 retries" in str(info.value)
    assert "denied" in str(info.value)
    assert len(fake.calls) == 3


def test_push_first_try_does_not_sleep(fake_run, monkeypatch):
    sleeps = []
    monkeypatch.setattr(git.time, "sleep", sleeps.append)
    fake = fake_run((0, None, ""))
    assert push_with_retry("", "docs", 3) is None
    assert sleeps == []
    assert len(fake.calls) == 1


def test_is_git_repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert is_git_repo() is False
    (tmp_path / ".git").mkdir()
    assert is_git_repo() is True


def test_has_uncommitted_changes_clean(fake_run):
    fake = fake_run((0, "\n", None))
    assert has_uncommitted_changes("wt") is False
    assert fake.calls[0][0] == ["git", "status", "--porcelain"]


def test_has_uncommitted_changes_dirty(fake_run):
    fake_run((0, " M CLAUDE.md\n", None))
    assert has_uncommitted_changes("wt") is True


def test_has_uncommitted_changes_on_error(fake_run):
    fake_run((128, "fatal", None))
    assert has_uncommitted_changes("wt") is False