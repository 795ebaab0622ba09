"""The git-up.log-hook command, run before each branch is changed.

Example, showing what is about to be replayed:

    git config git-up.log-hook 'git log --oneline $1..$2'

The hook is run by `sh -c` with $0 set to "git-up", $1 to the local
branch and $2 to the remote-tracking ref.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

HOOK_NAME = "git-up"


def hook_command(command: str, branch: str, remote: str) -> list:
    return ["sh", "-c", command, HOOK_NAME, branch, remote]


def run_log_hook(
    command: Optional[str],
    branch: str,
    remote: str,
    cwd: Optional[Path] = None,
) -> Optional[int]:
    """Run the log hook if one is configured.

    The hook shares the terminal. Its exit status is only logged; a
    failing hook does not stop the run.

    Returns:
        The hook's exit status, or None when no hook is configured
    """
    if not command:
        return None

    try:
        result = subprocess.run(hook_command(command, branch, remote), cwd=cwd)
    except FileNotFoundError:
        logger.warning("log-hook skipped: sh is not available")
        return None

    if result.returncode != 0:
        logger.warning("log-hook exited with %d for %s", result.returncode, branch)
    return result.returncode
