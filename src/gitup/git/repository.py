"""VersionControlPort implementation backed by the git executable.

This is the only module that knows what git's output looks like.
Path listings use -z so file names never come back quoted.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from gitup.core.errors import NotARepositoryError
from gitup.core.models import Branch, RemoteRef, WorkingTreeStatus
from gitup.git.port import VersionControlPort
from gitup.git.utils import (
    DEFAULT_GIT_TIMEOUT,
    combined_output,
    parse_version,
    run_git,
)

logger = logging.getLogger(__name__)

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"
REF_FORMAT = "--format=%(refname) %(objectname)"


def fetch_args(remotes: Sequence[str], all_remotes: bool = False, prune: bool = False) -> List[str]:
    """Arguments for a single `git fetch` covering every remote in use."""
    args = ["fetch", "--multiple"]
    if prune:
        args.append("--prune")
    if all_remotes:
        args.append("--all")
    else:
        args.extend(remotes)
    return args


class GitRepository(VersionControlPort):
    """A working copy driven through `git` subprocesses."""

    def __init__(self, path: Optional[Path] = None, timeout: Optional[int] = DEFAULT_GIT_TIMEOUT):
        """Initialize the repository wrapper.

        Args:
            path: Any directory inside the working copy (defaults to cwd)
            timeout: Per-command timeout in seconds, None for no limit
        """
        self.path = path or Path.cwd()
        self.timeout = timeout

    @classmethod
    def discover(cls, path: Optional[Path] = None) -> "GitRepository":
        """Open the repository containing path, rooted at its top level.

        Raises:
            NotARepositoryError: If path is not inside a working copy
        """
        root = cls(path).repo_root()
        if root is None:
            raise NotARepositoryError()
        return cls(root)

    def _run_git(self, *args, check: bool = False, capture: bool = True):
        return run_git(*args, cwd=self.path, check=check, timeout=self.timeout, capture=capture)

    @contextmanager
    def unlimited_timeout(self) -> Iterator["GitRepository"]:
        """Disable the command timeout for the duration of the block."""
        previous = self.timeout
        self.timeout = None
        try:
            yield self
        finally:
            self.timeout = previous

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def repo_root(self) -> Optional[Path]:
        result = self._run_git("rev-parse", "--show-toplevel")
        if result.returncode != 0:
            return None
        return Path(result.stdout.strip())

    def _refs(self, namespace: str) -> List[Tuple[str, str]]:
        result = self._run_git("for-each-ref", REF_FORMAT, namespace, check=True)
        refs = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            refname, _, sha = line.rpartition(" ")
            refs.append((refname[len(namespace):], sha))
        return refs

    def local_branches(self) -> List[Branch]:
        return [Branch(name, sha) for name, sha in self._refs(LOCAL_PREFIX)]

    def remote_refs(self) -> List[RemoteRef]:
        # origin/HEAD is a symbolic pointer, not something a branch tracks
        return [
            RemoteRef(name, sha)
            for name, sha in self._refs(REMOTE_PREFIX)
            if not name.endswith("/HEAD")
        ]

    def config_get(self, key: str) -> Optional[str]:
        result = self._run_git("config", "--get", key)
        if result.returncode != 0:
            return None
        return result.stdout.rstrip("\n")

    def status(self) -> WorkingTreeStatus:
        result = self._run_git("diff-index", "-z", "--name-status", "HEAD")
        status = WorkingTreeStatus()
        if result.returncode != 0:
            # No HEAD yet (empty repository): nothing is tracked
            return status

        tokens = [t for t in result.stdout.split("\0") if t]
        pairs = iter(tokens)
        for code in pairs:
            path = next(pairs, None)
            if path is None:
                break
            if code.startswith("A"):
                status.added.append(path)
            elif code.startswith("D"):
                status.deleted.append(path)
            else:
                status.changed.append(path)
        return status

    def short_status(self) -> List[str]:
        result = self._run_git("status", "--porcelain", "-z", check=True)
        entries = result.stdout.split("\0")
        paths = []
        i = 0
        while i < len(entries):
            entry = entries[i]
            i += 1
            if len(entry) < 4:
                continue
            code, path = entry[:2], entry[3:]
            paths.append(path)
            if "R" in code or "C" in code:
                i += 1  # skip the rename/copy source
        return paths

    def merge_base(self, a: str, b: str) -> str:
        result = self._run_git("merge-base", a, b)
        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def current_branch(self) -> Optional[str]:
        result = self._run_git("symbolic-ref", "-q", "--short", "HEAD")
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def version(self) -> Optional[str]:
        result = self._run_git("--version")
        if result.returncode != 0:
            return None
        return parse_version(result.stdout)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def fetch(self, remotes: Sequence[str], all_remotes: bool = False, prune: bool = False) -> bool:
        # Progress goes straight to the terminal
        result = self._run_git(*fetch_args(remotes, all_remotes, prune), capture=False)
        return result.returncode == 0

    def stash_save(self) -> Tuple[bool, str]:
        result = self._run_git("stash")
        return result.returncode == 0, combined_output(result)

    def stash_pop(self) -> Tuple[bool, str]:
        result = self._run_git("stash", "pop")
        return result.returncode == 0, combined_output(result)

    def checkout(self, ref: str) -> str:
        result = self._run_git("checkout", ref)
        return combined_output(result)

    def rebase(self, ref: str) -> Tuple[bool, str]:
        result = self._run_git("rebase", ref)
        return result.returncode == 0, combined_output(result)
