"""Tests for gitup.ui.reporter module."""

import io

import pytest

from gitup.core.models import OutcomeKind, SyncOutcome, SyncState
from gitup.ui.reporter import ConsoleReporter
from gitup.ui.theme import make_console


@pytest.fixture
def reporter():
    console = make_console(file=io.StringIO(), width=120, color_system=None)
    return ConsoleReporter(console)


def _output(reporter):
    return reporter.console.file.getvalue()


class TestConsoleReporter:

    def test_branch_lines_are_aligned(self, reporter):
        reporter.begin(len("feature/login") + 1)
        reporter.outcome(SyncOutcome("main", "origin/main", OutcomeKind.UP_TO_DATE))
        reporter.outcome(SyncOutcome("feature/login", "origin/feature/login", OutcomeKind.AHEAD))
        lines = _output(reporter).splitlines()
        assert lines == [
            "main          up to date",
            "feature/login ahead of upstream",
        ]

    def test_syncing_messages(self, reporter):
        reporter.begin(5)
        reporter.syncing("dev", "origin/dev", SyncState.FAST_FORWARDABLE)
        reporter.syncing("main", "origin/main", SyncState.DIVERGED)
        assert _output(reporter).splitlines() == [
            "dev  fast-forwarding...",
            "main rebasing...",
        ]

    def test_rebased_outcome_prints_nothing_more(self, reporter):
        reporter.begin(5)
        reporter.outcome(SyncOutcome("main", "origin/main", OutcomeKind.REBASED))
        assert _output(reporter) == ""

    def test_branch_names_are_not_markup(self, reporter):
        reporter.begin(10)
        reporter.outcome(SyncOutcome("[wip]x", "origin/[wip]x", OutcomeKind.UP_TO_DATE))
        assert "[wip]x" in _output(reporter)

    def test_stash_messages(self, reporter):
        reporter.stashing(1)
        reporter.stashing(3)
        reporter.unstashing()
        assert _output(reporter).splitlines() == [
            "stashing 1 change",
            "stashing 3 changes",
            "unstashing",
        ]

    def test_stash_left_behind_mentions_recovery(self, reporter):
        reporter.stash_left_behind("error: conflict\n")
        output = _output(reporter)
        assert "git stash pop" in output
        assert "error: conflict" in output

    def test_not_on_branch(self, reporter):
        reporter.not_on_branch()
        assert "not currently on a branch" in _output(reporter)
