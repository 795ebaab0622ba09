"""Reporting of run progress and per-branch outcomes.

The orchestrator never prints. It calls a Reporter, so the terminal
output can be swapped for something else (tests use RecordingReporter).
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from gitup.core.models import OutcomeKind, SyncOutcome, SyncState
from gitup.ui.theme import make_console


class Reporter:
    """Receives run events. The base class ignores all of them."""

    def begin(self, width: int) -> None:
        """Branch processing starts; width is the branch-name column width."""

    def no_tracking_branches(self) -> None:
        pass

    def syncing(self, branch: str, remote: str, state: SyncState) -> None:
        """A branch is about to be fast-forwarded or rebased."""

    def outcome(self, outcome: SyncOutcome) -> None:
        pass

    def stashing(self, count: int) -> None:
        pass

    def unstashing(self) -> None:
        pass

    def stash_left_behind(self, output: str) -> None:
        """Restoring the stash failed after an error; edits are still stashed."""

    def returning(self, branch: str) -> None:
        pass

    def return_failed(self, branch: str, output: str) -> None:
        pass

    def not_on_branch(self) -> None:
        pass

    def warning(self, message: str) -> None:
        pass


class ConsoleReporter(Reporter):
    """Writes aligned, colored status lines to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or make_console()
        self.width = 0

    def _branch_line(self, branch: str, text: str, style: str) -> None:
        self.console.print(f"{escape(branch.ljust(self.width))}[{style}]{text}[/]")

    def begin(self, width: int) -> None:
        self.width = width

    def no_tracking_branches(self) -> None:
        self.console.print("[text.dim]No local branches track a remote branch; nothing to do.[/]")

    def syncing(self, branch: str, remote: str, state: SyncState) -> None:
        if state is SyncState.FAST_FORWARDABLE:
            self._branch_line(branch, "fast-forwarding...", "status.busy")
        else:
            self._branch_line(branch, "rebasing...", "status.busy")

    def outcome(self, outcome: SyncOutcome) -> None:
        # Fast-forwards and rebases were announced by syncing(); failures
        # are printed with git's output by the CLI.
        if outcome.kind is OutcomeKind.UP_TO_DATE:
            self._branch_line(outcome.branch, "up to date", "status.ok")
        elif outcome.kind is OutcomeKind.AHEAD:
            self._branch_line(outcome.branch, "ahead of upstream", "status.ok")

    def stashing(self, count: int) -> None:
        noun = "change" if count == 1 else "changes"
        self.console.print(f"[housekeeping]stashing {count} {noun}[/]")

    def unstashing(self) -> None:
        self.console.print("[housekeeping]unstashing[/]")

    def stash_left_behind(self, output: str) -> None:
        self.console.print(
            "[warning]Could not restore your stashed changes. "
            "They are still in the stash; run `git stash pop` when ready.[/]"
        )
        if output.strip():
            self.console.print(escape(output.rstrip()), style="text.dim")

    def returning(self, branch: str) -> None:
        self.console.print(f"[housekeeping]returning to {escape(branch)}[/]")

    def return_failed(self, branch: str, output: str) -> None:
        self.console.print(f"[warning]Could not return to {escape(branch)}.[/]")
        if output.strip():
            self.console.print(escape(output.rstrip()), style="text.dim")

    def not_on_branch(self) -> None:
        self.console.print(
            "[error]You're not currently on a branch. "
            "I'm exiting in case you're in the middle of something.[/]"
        )

    def warning(self, message: str) -> None:
        self.console.print(f"[warning]{escape(message)}[/]")


class RecordingReporter(Reporter):
    """Keeps every event in order; handy for tests and scripting."""

    def __init__(self):
        self.events: List[Tuple] = []
        self.outcomes: List[SyncOutcome] = []
        self.width: Optional[int] = None

    def begin(self, width: int) -> None:
        self.width = width
        self.events.append(("begin", width))

    def no_tracking_branches(self) -> None:
        self.events.append(("no_tracking_branches",))

    def syncing(self, branch: str, remote: str, state: SyncState) -> None:
        self.events.append(("syncing", branch, remote, state))

    def outcome(self, outcome: SyncOutcome) -> None:
        self.outcomes.append(outcome)
        self.events.append(("outcome", outcome.branch, outcome.kind))

    def stashing(self, count: int) -> None:
        self.events.append(("stashing", count))

    def unstashing(self) -> None:
        self.events.append(("unstashing",))

    def stash_left_behind(self, output: str) -> None:
        self.events.append(("stash_left_behind", output))

    def returning(self, branch: str) -> None:
        self.events.append(("returning", branch))

    def return_failed(self, branch: str, output: str) -> None:
        self.events.append(("return_failed", branch, output))

    def not_on_branch(self) -> None:
        self.events.append(("not_on_branch",))

    def warning(self, message: str) -> None:
        self.events.append(("warning", message))

    @property
    def warnings(self) -> List[str]:
        return [e[1] for e in self.events if e[0] == "warning"]
