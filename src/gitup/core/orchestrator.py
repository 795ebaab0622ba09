"""Bring every tracking branch up to date with its upstream.

A run fetches the remotes in use, then, with local edits stashed and a
promise to come back to the current branch, walks the tracking branches
in order:

    up to date / ahead of upstream  ->  report, touch nothing
    fast-forwardable / diverged     ->  log hook, checkout, rebase

The first failing checkout or rebase stops the run. The original branch
and the stashed edits are restored on the way out either way.
"""

import logging
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Iterator, List, Optional

from gitup.bundler import check_bundler
from gitup.core.checkout import checkout, on_branch
from gitup.core.classifier import classify
from gitup.core.config import GitUpConfig
from gitup.core.errors import GitUpError, NotARepositoryError
from gitup.core.fetch import fetch_remotes
from gitup.core.hooks import run_log_hook
from gitup.core.models import (
    Branch,
    OutcomeKind,
    RemoteMapping,
    RemoteRef,
    RunContext,
    RunResult,
    SyncOutcome,
    SyncState,
    outcome_for,
)
from gitup.core.rebase import rebase
from gitup.core.remotes import build_remote_map, remotes_in_use, tracked_branches
from gitup.core.stash import stash_guard
from gitup.git.port import VersionControlPort
from gitup.ui.reporter import Reporter

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """Runs `git up` against one repository.

    Each call to run() gets a fresh RunContext; the most recent one stays
    available as ``context`` so callers can inspect outcomes after a
    failure.
    """

    def __init__(
        self,
        port: VersionControlPort,
        config: Optional[GitUpConfig] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.port = port
        self.reporter = reporter or Reporter()
        self._config = config
        self.root: Optional[Path] = None
        self.context: Optional[RunContext] = None

    # =========================================================================
    # Run
    # =========================================================================

    def run(self) -> RunResult:
        """Fetch, then rebase every tracking branch onto its upstream.

        Raises:
            NotARepositoryError: Outside a working copy
            FetchFailedError: If the fetch fails (nothing else is attempted)
            CheckoutFailedError, RebaseFailedError: Stop the branch loop
            StashError: If local edits could not be stashed or restored
        """
        self.root = self.port.repo_root()
        if self.root is None:
            raise NotARepositoryError()

        config = self._config or GitUpConfig.load(self.port)
        context = RunContext(config=config)
        self.context = context

        with self._unlimited_timeout():
            fetch_remotes(self.port, config, remotes_in_use(self.remote_map(context)), self.reporter)
        context.invalidate_remote_map()

        context.original_branch = self.port.current_branch()
        result = RunResult(original_branch=context.original_branch)

        if context.original_branch is None:
            self.reporter.not_on_branch()
            result.skipped = True
        else:
            with self._unlimited_timeout():
                with stash_guard(self.port, context, self.reporter) as stashed:
                    result.stashed = stashed > 0
                    with self.returning_to_original_branch(context):
                        self.sync_branches(context)

        result.outcomes = list(context.outcomes)
        check_bundler(config, self.root, self.reporter)
        return result

    def _unlimited_timeout(self):
        # Rebasing large histories can legitimately take a long time
        unlimited = getattr(self.port, "unlimited_timeout", None)
        return unlimited() if unlimited is not None else nullcontext()

    def remote_map(self, context: RunContext) -> RemoteMapping:
        """The run's branch -> upstream mapping, built on first use."""
        if context.remote_map is None:
            context.remote_map = build_remote_map(self.port)
        return context.remote_map

    # =========================================================================
    # Envelope
    # =========================================================================

    @contextmanager
    def returning_to_original_branch(self, context: RunContext) -> Iterator[None]:
        """Check the original branch out again once the block is done.

        After a failure the attempt is best effort: if git refuses (for
        example mid-rebase), the user is told and the failure propagates.
        """
        branch = context.original_branch
        try:
            yield
        except BaseException:
            if branch and not on_branch(self.port, branch):
                self.reporter.returning(branch)
                output = self.port.checkout(branch)
                if not on_branch(self.port, branch):
                    logger.warning("could not return to %s after a failed run", branch)
                    self.reporter.return_failed(branch, output)
            raise

        if branch and not on_branch(self.port, branch):
            self.reporter.returning(branch)
            checkout(self.port, branch)

    # =========================================================================
    # Branch loop
    # =========================================================================

    def branches_to_sync(self, context: RunContext) -> List[Branch]:
        mapping = self.remote_map(context)
        branches = tracked_branches(self.port.local_branches(), mapping)
        if context.config.sort:
            branches = sorted(branches, key=lambda b: b.name)
        return branches

    def sync_branches(self, context: RunContext) -> List[SyncOutcome]:
        """Process tracking branches in order, stopping at the first failure."""
        mapping = self.remote_map(context)
        branches = self.branches_to_sync(context)
        if not branches:
            self.reporter.no_tracking_branches()
            return []

        self.reporter.begin(max(len(b.name) for b in branches) + 1)
        for branch in branches:
            self.sync_branch(context, branch, mapping[branch.name])
        return context.outcomes

    def sync_branch(self, context: RunContext, branch: Branch, remote: RemoteRef) -> SyncState:
        state = classify(self.port, branch, remote)
        logger.debug("%s vs %s: %s", branch.name, remote.name, state.value)

        if not state.needs_rebase:
            self._record(context, SyncOutcome(branch.name, remote.name, outcome_for(state)))
            return state

        self.reporter.syncing(branch.name, remote.name, state)
        run_log_hook(context.config.log_hook, branch.name, remote.name, cwd=self.root)

        try:
            checkout(self.port, branch.name)
            rebase(self.port, branch.name, remote)
        except GitUpError as exc:
            self._record(
                context,
                SyncOutcome(branch.name, remote.name, OutcomeKind.FAILED, reason=exc.message),
            )
            raise

        self._record(context, SyncOutcome(branch.name, remote.name, outcome_for(state)))
        return state

    def _record(self, context: RunContext, outcome: SyncOutcome) -> None:
        context.outcomes.append(outcome)
        self.reporter.outcome(outcome)
