"""Git access for git-up."""

from gitup.git.utils import (
    DEFAULT_GIT_TIMEOUT,
    GitError,
    GitNotInstalledError,
    GitTimeoutError,
    GitCommandError,
    run_git,
)
from gitup.git.port import VersionControlPort
from gitup.git.repository import GitRepository

__all__ = [
    "DEFAULT_GIT_TIMEOUT",
    "GitError",
    "GitNotInstalledError",
    "GitTimeoutError",
    "GitCommandError",
    "run_git",
    "VersionControlPort",
    "GitRepository",
]
