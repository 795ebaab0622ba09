"""Fetch the remotes that local branches track."""

import logging
from typing import Optional, Sequence

from gitup.core.config import GitUpConfig
from gitup.core.errors import FetchFailedError
from gitup.git.port import VersionControlPort
from gitup.git.utils import version_at_least
from gitup.ui.reporter import Reporter

logger = logging.getLogger(__name__)

# `git fetch --prune` appeared in this release
PRUNE_MIN_VERSION = "1.6.6"


def should_prune(
    config: GitUpConfig,
    git_version: Optional[str],
    reporter: Optional[Reporter] = None,
) -> bool:
    """Whether to pass --prune.

    On by default when git supports it, unless fetch.prune is false.
    An explicit true on an older git is ignored with a warning.
    """
    if version_at_least(git_version, PRUNE_MIN_VERSION):
        return config.fetch_prune is not False

    if config.fetch_prune is True and reporter is not None:
        reporter.warning(
            "Warning: fetch.prune is set to 'true' but your git version doesn't "
            f"seem to support it ({git_version} < {PRUNE_MIN_VERSION}). "
            "Defaulting to 'false'."
        )
    return False


def fetch_remotes(
    port: VersionControlPort,
    config: GitUpConfig,
    remotes: Sequence[str],
    reporter: Optional[Reporter] = None,
) -> bool:
    """Fetch `remotes` (or every remote with fetch.all).

    Returns:
        False when there was nothing to fetch, True after a fetch

    Raises:
        FetchFailedError: If git fetch exits non-zero
    """
    if not remotes and not config.fetch_all:
        logger.debug("no tracked remotes, skipping fetch")
        return False

    prune = should_prune(config, port.version(), reporter)
    if not port.fetch(remotes, all_remotes=config.fetch_all, prune=prune):
        raise FetchFailedError("`git fetch` failed")
    return True
