"""Keep uncommitted edits safe while branches are being rebased.

stash_guard() stashes relevant local changes before the block runs and
pops them on every way out of it. When the block fails, a failing pop is
reported as a warning and the block's own error is re-raised.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from gitup.core.errors import StashError
from gitup.core.models import RunContext
from gitup.git.port import VersionControlPort
from gitup.ui.reporter import Reporter

logger = logging.getLogger(__name__)


def relevant_change_count(port: VersionControlPort) -> int:
    """Count tracked changes that the short status also reports.

    Entries missing from the short status (untracked files, stale index
    stat data) are not worth stashing.
    """
    listed = set(port.short_status())
    status = port.status()
    return sum(1 for path in status.paths() if path in listed)


def _pop(port: VersionControlPort, context: RunContext, reporter: Reporter) -> None:
    reporter.unstashing()
    succeeded, output = port.stash_pop()
    if not succeeded:
        raise StashError("Failed to restore stashed changes", output)
    context.stashed = False


@contextmanager
def stash_guard(
    port: VersionControlPort,
    context: RunContext,
    reporter: Optional[Reporter] = None,
) -> Iterator[int]:
    """Stash local edits around the block; yields the number stashed."""
    reporter = reporter or Reporter()
    count = relevant_change_count(port)

    if count > 0:
        reporter.stashing(count)
        succeeded, output = port.stash_save()
        if not succeeded:
            raise StashError("Failed to stash local changes", output)
        context.stashed = True
        logger.debug("stashed %d changes", count)

    try:
        yield count
    except BaseException:
        if context.stashed:
            reporter.unstashing()
            succeeded, output = port.stash_pop()
            if succeeded:
                context.stashed = False
            else:
                logger.warning("stash pop failed after an aborted run")
                reporter.stash_left_behind(output)
        raise

    if context.stashed:
        _pop(port, context, reporter)
