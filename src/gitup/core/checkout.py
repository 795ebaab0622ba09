"""Switch branches and make sure the switch happened."""

import logging

from gitup.core.errors import CheckoutFailedError
from gitup.git.port import VersionControlPort

logger = logging.getLogger(__name__)


def on_branch(port: VersionControlPort, name: str) -> bool:
    """True when HEAD is the named branch (not a detached commit)."""
    return port.current_branch() == name


def checkout(port: VersionControlPort, name: str) -> None:
    """Check out branch `name`.

    Raises:
        CheckoutFailedError: If HEAD is not on `name` afterwards
    """
    output = port.checkout(name)
    if not on_branch(port, name):
        raise CheckoutFailedError(f"Failed to checkout {name}", output)
    logger.debug("checked out %s", name)
