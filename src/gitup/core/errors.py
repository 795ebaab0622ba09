"""Errors that abort a git-up run.

Every error carries a user-facing message and, when git produced any,
the raw output of the failing command so conflicts can be inspected.
"""

from typing import Optional


class GitUpError(Exception):
    """Base exception for fatal git-up failures."""

    def __init__(self, message: str, output: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.output = output


class NotARepositoryError(GitUpError):
    """The working directory is not inside a git repository."""

    def __init__(self, message: str = "We don't seem to be in a git repository."):
        super().__init__(message)


class FetchFailedError(GitUpError):
    """`git fetch` exited non-zero."""
    pass


class CheckoutFailedError(GitUpError):
    """HEAD did not end up on the requested branch."""
    pass


class RebaseFailedError(GitUpError):
    """A rebase did not leave the branch on top of its upstream."""
    pass


class StashError(GitUpError):
    """Saving or restoring the stash failed."""
    pass
