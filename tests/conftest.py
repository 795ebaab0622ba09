"""Shared test fixtures for git-up.

Provides:
- git_workspace: a real git repository with one commit on main
- remote_setup: a bare "origin", a working clone and a second clone
  used to push upstream changes
- fake_repo: factory for FakeRepository with sensible defaults
- cli_runner: Click CliRunner
- mock_git_basic: pytest-subprocess fixture pre-configured for git commands
"""

import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitup.git.fake import FakeRepository


def git(cwd: Path, *args: str) -> str:
    """Run git in cwd and return stdout; fail the test on error."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, f"git {' '.join(args)} failed:\n{result.stderr}"
    return result.stdout


def configure(repo: Path) -> None:
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "commit.gpgsign", "false")


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it and return the new HEAD sha."""
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD").strip()


@pytest.fixture
def git_workspace(tmp_path):
    """Create a temporary workspace that is a real git repo on main."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    configure(repo)
    commit_file(repo, "README.md", "# Test Project\n", "Initial commit")
    return repo


class RemoteSetup:
    """A bare origin plus two clones: `work` (under test) and `other`."""

    def __init__(self, root: Path):
        self.origin = root / "origin.git"
        self.work = root / "work"
        self.other = root / "other"

    def push_upstream(self, name: str, content: str, branch: str = "main") -> str:
        """Commit in `other` on branch and push it to origin."""
        git(self.other, "checkout", branch)
        sha = commit_file(self.other, name, content, f"upstream change to {name}")
        git(self.other, "push", "origin", branch)
        return sha

    def head(self, ref: str) -> str:
        return git(self.work, "rev-parse", ref).strip()

    def current_branch(self) -> str:
        return git(self.work, "symbolic-ref", "--short", "HEAD").strip()


@pytest.fixture
def remote_setup(tmp_path):
    """Origin with main pushed from `work`; `other` cloned from origin."""
    setup = RemoteSetup(tmp_path)

    setup.origin.mkdir()
    git(setup.origin, "init", "--bare")
    git(setup.origin, "symbolic-ref", "HEAD", "refs/heads/main")

    setup.work.mkdir()
    git(setup.work, "init")
    git(setup.work, "symbolic-ref", "HEAD", "refs/heads/main")
    configure(setup.work)
    commit_file(setup.work, "README.md", "# Test Project\n", "Initial commit")
    git(setup.work, "remote", "add", "origin", str(setup.origin))
    git(setup.work, "push", "-u", "origin", "main")

    git(tmp_path, "clone", str(setup.origin), str(setup.other))
    configure(setup.other)
    return setup


@pytest.fixture
def fake_repo():
    """Factory for FakeRepository; main and feature track origin by default."""

    def _make(**kwargs) -> FakeRepository:
        kwargs.setdefault("branches", {"main": "m1", "feature": "f1"})
        kwargs.setdefault("remotes", {"origin/main": "m1", "origin/feature": "f1"})
        kwargs.setdefault("current_branch", "main")
        return FakeRepository(**kwargs)

    return _make


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def mock_git_basic(fp):
    """Mock basic git commands using pytest-subprocess.

    Pre-registers common git operations. Use `fp` directly
    for custom subprocess mocking in individual tests.
    """
    fp.register(
        ["git", "rev-parse", "--show-toplevel"],
        stdout="/repo\n",
    )
    fp.register(
        ["git", "symbolic-ref", "-q", "--short", "HEAD"],
        stdout="main\n",
    )
    fp.register(
        ["git", "--version"],
        stdout="git version 2.43.0\n",
    )
    return fp
