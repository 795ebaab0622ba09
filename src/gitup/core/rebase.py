"""Replay a branch onto its upstream and verify the result."""

import logging

from gitup.core.checkout import on_branch
from gitup.core.errors import RebaseFailedError
from gitup.core.models import RemoteRef
from gitup.git.port import VersionControlPort

logger = logging.getLogger(__name__)


def is_fast_forward(port: VersionControlPort, branch_name: str, target: RemoteRef) -> bool:
    """True when target's head is an ancestor of (or equal to) the branch head."""
    return port.merge_base(branch_name, target.head) == target.head


def rebase(port: VersionControlPort, branch_name: str, target: RemoteRef) -> None:
    """Rebase the checked-out branch `branch_name` onto `target`.

    The exit status alone is not trusted: afterwards HEAD must still be
    the branch, and the branch must contain target's head.

    Raises:
        RebaseFailedError: With git's combined output, on any failed check
    """
    succeeded, output = port.rebase(target.name)
    if not succeeded:
        logger.debug("git rebase %s exited non-zero", target.name)

    if not (succeeded and on_branch(port, branch_name) and is_fast_forward(port, branch_name, target)):
        raise RebaseFailedError(
            f"Failed to rebase {branch_name} onto {target.name}",
            output,
        )
