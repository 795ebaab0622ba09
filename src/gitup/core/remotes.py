"""Resolve the upstream each local branch tracks."""

from typing import Dict, Iterable, List, Optional

from gitup.core.models import Branch, RemoteMapping, RemoteRef
from gitup.git.port import VersionControlPort

DEFAULT_REMOTE = "origin"
HEADS_PREFIX = "refs/heads/"


def upstream_name(port: VersionControlPort, branch_name: str) -> str:
    """Name of the remote-tracking ref a branch is configured to follow.

    Uses branch.<name>.remote (default "origin") and branch.<name>.merge
    (default: the branch's own name).
    """
    remote = port.config_get(f"branch.{branch_name}.remote") or DEFAULT_REMOTE
    merge = port.config_get(f"branch.{branch_name}.merge") or branch_name
    if merge.startswith(HEADS_PREFIX):
        merge = merge[len(HEADS_PREFIX):]
    return f"{remote}/{merge}"


def resolve_remote(
    port: VersionControlPort,
    branch: Branch,
    remote_refs: Optional[Iterable[RemoteRef]] = None,
) -> Optional[RemoteRef]:
    """Find the remote-tracking ref for branch, or None if it has none."""
    wanted = upstream_name(port, branch.name)
    refs = port.remote_refs() if remote_refs is None else remote_refs
    for ref in refs:
        if ref.name == wanted:
            return ref
    return None


def build_remote_map(
    port: VersionControlPort,
    branches: Optional[List[Branch]] = None,
) -> RemoteMapping:
    """Map every local branch that has an upstream to that upstream.

    Branches without one are left out; they are not an error.
    """
    if branches is None:
        branches = port.local_branches()
    remote_refs = port.remote_refs()

    mapping: Dict[str, RemoteRef] = {}
    for branch in branches:
        remote = resolve_remote(port, branch, remote_refs)
        if remote is not None:
            mapping[branch.name] = remote
    return mapping


def remotes_in_use(mapping: RemoteMapping) -> List[str]:
    """Distinct remote names referenced by the mapping, first-seen order."""
    seen: List[str] = []
    for ref in mapping.values():
        if ref.remote not in seen:
            seen.append(ref.remote)
    return seen


def tracked_branches(branches: Iterable[Branch], mapping: RemoteMapping) -> List[Branch]:
    """The branches that take part in synchronization, in input order."""
    return [b for b in branches if b.name in mapping]
