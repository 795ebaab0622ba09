"""Low-level helpers for running the git executable.

Every git invocation made by git-up goes through run_git(), so
command logging, timeouts and "git is not installed" handling live
in one place.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Default timeout for git queries (seconds). None disables it.
DEFAULT_GIT_TIMEOUT = 60

_VERSION_RE = re.compile(r"\d+(\.\d+)+")


# =============================================================================
# Exceptions
# =============================================================================

class GitError(Exception):
    """Base exception for Git operations."""
    pass


class GitNotInstalledError(GitError):
    """Git is not installed or not in PATH."""
    pass


class GitTimeoutError(GitError):
    """Git command timed out."""

    def __init__(self, message: str, timeout: Optional[int]):
        super().__init__(message)
        self.timeout = timeout


class GitCommandError(GitError):
    """Git command failed with non-zero exit code."""

    def __init__(self, message: str, returncode: int, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


# =============================================================================
# Core Functions
# =============================================================================

def run_git(
    *args,
    cwd: Optional[Path] = None,
    check: bool = False,
    timeout: Optional[int] = DEFAULT_GIT_TIMEOUT,
    capture: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command with standard options.

    Args:
        *args: Git command arguments
        cwd: Working directory
        check: Raise exception on failure
        timeout: Command timeout in seconds (None for no limit)
        capture: Capture output; when False git writes straight to the terminal

    Returns:
        CompletedProcess result

    Raises:
        GitNotInstalledError: If git is not installed
        GitTimeoutError: If command times out
        GitCommandError: If check=True and command fails
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)
    logger.debug("running: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd or Path.cwd(),
            capture_output=capture,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GitNotInstalledError(
            "Git is not installed or not in PATH. "
            "Please install git: https://git-scm.com/downloads"
        )
    except subprocess.TimeoutExpired:
        raise GitTimeoutError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            timeout=timeout,
        )

    if result.returncode != 0:
        logger.debug("%s exited with %d", cmd_str, result.returncode)
    if check and result.returncode != 0:
        raise GitCommandError(
            f"Git command failed: {cmd_str}\n{result.stderr}",
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    return result


def combined_output(result: subprocess.CompletedProcess) -> str:
    """Return stdout followed by stderr, the way a terminal would show them."""
    return (result.stdout or "") + (result.stderr or "")


def parse_version(text: str) -> Optional[str]:
    """Extract a dotted version number from `git --version` output.

    >>> parse_version("git version 2.39.3 (Apple Git-146)")
    '2.39.3'
    """
    match = _VERSION_RE.search(text or "")
    return match.group(0) if match else None


def version_tuple(version: str) -> Tuple[int, ...]:
    """Turn "1.6.6" into (1, 6, 6) for ordered comparison."""
    parts = []
    for piece in version.split("."):
        digits = re.match(r"\d+", piece)
        parts.append(int(digits.group(0)) if digits else 0)
    return tuple(parts)


def version_at_least(version: Optional[str], required: str) -> bool:
    """Check whether version >= required. Unknown versions never qualify."""
    if not version:
        return False
    return version_tuple(version) >= version_tuple(required)
