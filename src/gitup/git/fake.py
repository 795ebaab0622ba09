"""In-memory VersionControlPort for tests.

FakeRepository accepts its initial state in the constructor and then
behaves like a small, predictable git: checkouts move HEAD, rebases move
branch heads, stashes clear the working tree status.

Examples:
    repo = FakeRepository(
        branches={"main": "a1", "feature": "b1"},
        remotes={"origin/main": "a1", "origin/feature": "b2"},
        merge_bases={("b1", "b2"): "b1"},
        current_branch="main",
    )
    repo.checkout("feature")
    repo.rebase("origin/feature")
    assert repo.branches["feature"] == "b2"
    assert repo.calls == [("checkout", "feature"), ("rebase", "origin/feature")]
"""

from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from gitup.core.models import Branch, RemoteRef, WorkingTreeStatus
from gitup.git.port import VersionControlPort

CONFLICT_OUTPUT = (
    "Auto-merging file.txt\n"
    "CONFLICT (content): Merge conflict in file.txt\n"
    "error: could not apply 1234567... local change\n"
)


class FakeRepository(VersionControlPort):
    """Stateful fake of a git working copy.

    Mutation tracking: every mutating call is appended to ``calls`` as a
    tuple, so tests can assert on exact ordering. Convenience properties
    (checked_out_branches, rebased, stash_saves, stash_pops, fetches)
    filter that log.
    """

    def __init__(
        self,
        *,
        root: Optional[Path] = Path("/repo"),
        branches: Optional[Dict[str, str]] = None,
        remotes: Optional[Dict[str, str]] = None,
        config: Optional[Dict[str, str]] = None,
        current_branch: Optional[str] = "main",
        merge_bases: Optional[Dict[Tuple[str, str], str]] = None,
        status: Optional[WorkingTreeStatus] = None,
        short_status: Optional[List[str]] = None,
        version: Optional[str] = "2.43.0",
        fetch_succeeds: bool = True,
        fetched_remotes: Optional[Dict[str, str]] = None,
        failing_checkouts: Iterable[str] = (),
        failing_rebases: Iterable[str] = (),
        inconsistent_rebases: Iterable[str] = (),
        stash_save_succeeds: bool = True,
        stash_pop_succeeds: bool = True,
    ):
        self._root = root
        self.branches = dict(branches or {})
        self.remotes = dict(remotes or {})
        self.config = dict(config or {})
        self._current = current_branch
        self._merge_bases: Dict[FrozenSet[str], str] = {
            frozenset(pair): base for pair, base in (merge_bases or {}).items()
        }
        self._status = status or WorkingTreeStatus()
        self._short_status = list(short_status or [])
        self._version = version
        self._fetch_succeeds = fetch_succeeds
        self._fetched_remotes = dict(fetched_remotes or {})
        self._failing_checkouts = set(failing_checkouts)
        self._failing_rebases = set(failing_rebases)
        self._inconsistent_rebases = set(inconsistent_rebases)
        self._stash_save_succeeds = stash_save_succeeds
        self._stash_pop_succeeds = stash_pop_succeeds
        self._stash: List[Tuple[WorkingTreeStatus, List[str]]] = []
        self.calls: List[tuple] = []

    # ------------------------------------------------------------------
    # Mutation tracking
    # ------------------------------------------------------------------

    def _calls_named(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    @property
    def checked_out_branches(self) -> List[str]:
        return [c[1] for c in self._calls_named("checkout")]

    @property
    def rebased(self) -> List[Tuple[str, str]]:
        """(branch, target) for every rebase attempted."""
        return [(c[2], c[1]) for c in self._calls_named("rebase")]

    @property
    def stash_saves(self) -> int:
        return len(self._calls_named("stash_save"))

    @property
    def stash_pops(self) -> int:
        return len(self._calls_named("stash_pop"))

    @property
    def stash_depth(self) -> int:
        return len(self._stash)

    @property
    def fetches(self) -> List[tuple]:
        return [c[1:] for c in self._calls_named("fetch")]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, ref: str) -> str:
        if ref in self.branches:
            return self.branches[ref]
        if ref in self.remotes:
            return self.remotes[ref]
        return ref

    def set_merge_base(self, a: str, b: str, base: str) -> None:
        self._merge_bases[frozenset((a, b))] = base

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def repo_root(self) -> Optional[Path]:
        return self._root

    def local_branches(self) -> List[Branch]:
        return [Branch(name, sha) for name, sha in self.branches.items()]

    def remote_refs(self) -> List[RemoteRef]:
        return [RemoteRef(name, sha) for name, sha in self.remotes.items()]

    def config_get(self, key: str) -> Optional[str]:
        return self.config.get(key)

    def status(self) -> WorkingTreeStatus:
        return WorkingTreeStatus(
            added=list(self._status.added),
            changed=list(self._status.changed),
            deleted=list(self._status.deleted),
        )

    def short_status(self) -> List[str]:
        return list(self._short_status)

    def merge_base(self, a: str, b: str) -> str:
        head_a, head_b = self._resolve(a), self._resolve(b)
        if head_a == head_b:
            return head_a
        return self._merge_bases.get(frozenset((head_a, head_b)), "")

    def current_branch(self) -> Optional[str]:
        return self._current

    def version(self) -> Optional[str]:
        return self._version

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def fetch(self, remotes: Sequence[str], all_remotes: bool = False, prune: bool = False) -> bool:
        self.calls.append(("fetch", tuple(remotes), all_remotes, prune))
        if self._fetch_succeeds:
            self.remotes.update(self._fetched_remotes)
        return self._fetch_succeeds

    def stash_save(self) -> Tuple[bool, str]:
        self.calls.append(("stash_save",))
        if not self._stash_save_succeeds:
            return False, "error: could not write index\n"
        self._stash.append((self._status, self._short_status))
        self._status = WorkingTreeStatus()
        self._short_status = []
        return True, "Saved working directory and index state WIP on fake\n"

    def stash_pop(self) -> Tuple[bool, str]:
        self.calls.append(("stash_pop",))
        if not self._stash_pop_succeeds or not self._stash:
            return False, "error: Your local changes would be overwritten\n"
        self._status, self._short_status = self._stash.pop()
        return True, "Dropped refs/stash@{0}\n"

    def checkout(self, ref: str) -> str:
        self.calls.append(("checkout", ref))
        if ref in self._failing_checkouts or ref not in self.branches:
            return f"error: pathspec '{ref}' did not match any file(s) known to git\n"
        self._current = ref
        return f"Switched to branch '{ref}'\n"

    def rebase(self, ref: str) -> Tuple[bool, str]:
        branch = self._current
        self.calls.append(("rebase", ref, branch))
        if branch is None:
            return False, "fatal: no current branch\n"
        if branch in self._failing_rebases:
            # Conflicted rebases leave HEAD detached
            self._current = None
            return False, CONFLICT_OUTPUT
        if branch in self._inconsistent_rebases:
            return True, ""

        target = self._resolve(ref)
        head = self.branches[branch]
        if self.merge_base(head, target) == head:
            new_head = target
        else:
            new_head = f"{head}+{target}"
            self.set_merge_base(new_head, target, target)
        self.branches[branch] = new_head
        return True, f"Successfully rebased and updated refs/heads/{branch}.\n"
