"""Abstract interface to the version-control tool.

The synchronization engine only talks to git through this interface.
GitRepository implements it on top of the git executable; FakeRepository
implements it in memory for tests. All parsing of git's text output
belongs to the implementations, never to the engine.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from gitup.core.models import Branch, RemoteRef, WorkingTreeStatus


class VersionControlPort(ABC):
    """Typed operations git-up needs from a repository."""

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def repo_root(self) -> Optional[Path]:
        """Top-level directory of the working copy, or None outside a repo."""
        ...

    @abstractmethod
    def local_branches(self) -> List[Branch]:
        """Local branches in the repository's native order."""
        ...

    @abstractmethod
    def remote_refs(self) -> List[RemoteRef]:
        """Remote-tracking refs, named ``<remote>/<branch>``."""
        ...

    @abstractmethod
    def config_get(self, key: str) -> Optional[str]:
        """Value of a config key, or None when unset."""
        ...

    @abstractmethod
    def status(self) -> WorkingTreeStatus:
        """Tracked paths added, changed or deleted relative to HEAD."""
        ...

    @abstractmethod
    def short_status(self) -> List[str]:
        """Paths listed by the short (porcelain) status."""
        ...

    @abstractmethod
    def merge_base(self, a: str, b: str) -> str:
        """Best common ancestor of two commits; empty string when none."""
        ...

    @abstractmethod
    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None when HEAD is detached."""
        ...

    @abstractmethod
    def version(self) -> Optional[str]:
        """Dotted version of the underlying tool, e.g. "2.43.0"."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def fetch(self, remotes: Sequence[str], all_remotes: bool = False, prune: bool = False) -> bool:
        """Fetch the given remotes (or all of them). Returns True on success."""
        ...

    @abstractmethod
    def stash_save(self) -> Tuple[bool, str]:
        """Stash local edits. Returns (success, output)."""
        ...

    @abstractmethod
    def stash_pop(self) -> Tuple[bool, str]:
        """Re-apply and drop the latest stash. Returns (success, output)."""
        ...

    @abstractmethod
    def checkout(self, ref: str) -> str:
        """Check out a ref and return the command output.

        Does not raise on failure; callers verify the resulting position.
        """
        ...

    @abstractmethod
    def rebase(self, ref: str) -> Tuple[bool, str]:
        """Rebase the current branch onto ref. Returns (success, output)."""
        ...
