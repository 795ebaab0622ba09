"""Data types shared by the synchronization engine.

Branch and RemoteRef are snapshots read from git; SyncState is derived
per branch and never stored; RunContext holds the state of a single
`git up` invocation and is thrown away when the run ends.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from gitup.core.config import GitUpConfig


# =============================================================================
# Repository snapshots
# =============================================================================

@dataclass(frozen=True)
class Branch:
    """A local branch and the commit it points at."""
    name: str
    head: str


@dataclass(frozen=True)
class RemoteRef:
    """A remote-tracking ref such as ``origin/main``."""
    name: str
    head: str

    @property
    def remote(self) -> str:
        return self.name.split("/", 1)[0]

    @property
    def branch(self) -> str:
        parts = self.name.split("/", 1)
        return parts[1] if len(parts) > 1 else ""


@dataclass
class WorkingTreeStatus:
    """Tracked changes relative to HEAD, grouped by kind."""
    added: List[str] = field(default_factory=list)
    changed: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    def paths(self) -> List[str]:
        return self.added + self.changed + self.deleted


# Branch name -> upstream it tracks
RemoteMapping = Dict[str, RemoteRef]


# =============================================================================
# Classification and outcomes
# =============================================================================

class SyncState(Enum):
    """How a local branch relates to its upstream."""
    UP_TO_DATE = "up_to_date"
    AHEAD_OF_UPSTREAM = "ahead_of_upstream"
    FAST_FORWARDABLE = "fast_forwardable"
    DIVERGED = "diverged"

    @property
    def needs_rebase(self) -> bool:
        return self in (SyncState.FAST_FORWARDABLE, SyncState.DIVERGED)


class OutcomeKind(Enum):
    """What happened to a branch during a run."""
    UP_TO_DATE = "up_to_date"
    AHEAD = "ahead"
    FAST_FORWARDED = "fast_forwarded"
    REBASED = "rebased"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncOutcome:
    """Result for one branch, handed to the reporter."""
    branch: str
    remote: str
    kind: OutcomeKind
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FAILED


_OUTCOME_FOR_STATE = {
    SyncState.UP_TO_DATE: OutcomeKind.UP_TO_DATE,
    SyncState.AHEAD_OF_UPSTREAM: OutcomeKind.AHEAD,
    SyncState.FAST_FORWARDABLE: OutcomeKind.FAST_FORWARDED,
    SyncState.DIVERGED: OutcomeKind.REBASED,
}


def outcome_for(state: SyncState) -> OutcomeKind:
    """Outcome recorded when a branch in `state` is handled successfully."""
    return _OUTCOME_FOR_STATE[state]


# =============================================================================
# Run state
# =============================================================================

@dataclass
class RunContext:
    """State owned by one invocation of the orchestrator."""
    config: GitUpConfig
    original_branch: Optional[str] = None
    stashed: bool = False
    remote_map: Optional[RemoteMapping] = None
    outcomes: List[SyncOutcome] = field(default_factory=list)

    def invalidate_remote_map(self) -> None:
        """Forget the cached mapping (refs changed, e.g. after a fetch)."""
        self.remote_map = None


@dataclass
class RunResult:
    """Summary returned by SyncOrchestrator.run()."""
    outcomes: List[SyncOutcome] = field(default_factory=list)
    original_branch: Optional[str] = None
    stashed: bool = False
    skipped: bool = False

    @property
    def synced(self) -> List[str]:
        return [
            o.branch for o in self.outcomes
            if o.kind in (OutcomeKind.FAST_FORWARDED, OutcomeKind.REBASED)
        ]
