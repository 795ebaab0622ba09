"""Branch synchronization engine.

Only the plain data types are re-exported here; the engine modules
import gitup.git and are imported directly (e.g. gitup.core.orchestrator).
"""

from gitup.core.config import GitUpConfig
from gitup.core.errors import (
    GitUpError,
    NotARepositoryError,
    FetchFailedError,
    CheckoutFailedError,
    RebaseFailedError,
    StashError,
)
from gitup.core.models import (
    Branch,
    RemoteRef,
    SyncState,
    OutcomeKind,
    SyncOutcome,
    RunContext,
    RunResult,
)

__all__ = [
    "GitUpConfig",
    "GitUpError",
    "NotARepositoryError",
    "FetchFailedError",
    "CheckoutFailedError",
    "RebaseFailedError",
    "StashError",
    "Branch",
    "RemoteRef",
    "SyncState",
    "OutcomeKind",
    "SyncOutcome",
    "RunContext",
    "RunResult",
]
