"""Decide what a branch needs, using only merge-base queries."""

from gitup.core.models import Branch, RemoteRef, SyncState
from gitup.git.port import VersionControlPort


def classify(port: VersionControlPort, branch: Branch, remote: RemoteRef) -> SyncState:
    """Classify branch against its upstream.

    - same commit: UP_TO_DATE
    - upstream is an ancestor of the branch: AHEAD_OF_UPSTREAM
    - branch is an ancestor of upstream: FAST_FORWARDABLE
    - anything else, including unrelated histories: DIVERGED
    """
    if branch.head == remote.head:
        return SyncState.UP_TO_DATE

    base = port.merge_base(branch.head, remote.head)
    if base == remote.head:
        return SyncState.AHEAD_OF_UPSTREAM
    if base == branch.head:
        return SyncState.FAST_FORWARDABLE
    return SyncState.DIVERGED
