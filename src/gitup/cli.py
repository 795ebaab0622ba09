"""Main CLI entry point for git-up."""

import logging
from pathlib import Path

import click
from rich.markup import escape

from gitup import __version__
from gitup.core.errors import GitUpError
from gitup.core.orchestrator import SyncOrchestrator
from gitup.git.repository import GitRepository
from gitup.git.utils import GitError
from gitup.ui.reporter import ConsoleReporter
from gitup.ui.theme import make_console

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def report_error(console, error: GitUpError) -> None:
    """Print a fatal error and, when there is any, what git said."""
    console.print(f"[error]{escape(error.message)}[/]")
    if error.output:
        console.print("[error]Here's what Git said:[/]")
        console.print(escape(error.output.rstrip()))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="git-up")
@click.option("--verbose", "-v", is_flag=True, help="Log every git command")
def main(verbose: bool):
    """git-up - fetch and rebase all locally-tracked remote branches.

    Fetches the remotes your branches track, then rebases every local
    branch with an upstream onto it. Uncommitted changes are stashed
    for the duration and you end up back on the branch you started on.

    \b
    Configuration (git config git-up.<key> <value>):
      sort                  Process branches in name order
      fetch.all             Fetch every remote, not only the ones in use
      fetch.prune           Prune deleted remote branches (default: true)
      log-hook "COMMAND"    Run COMMAND before each branch is changed;
                            $1 is the branch, $2 the remote ref
      bundler.check         Check for missing gems afterwards
      bundler.autoinstall   Run `bundle install` when gems are missing
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    console = make_console()
    try:
        repo = GitRepository.discover(Path.cwd())
        orchestrator = SyncOrchestrator(repo, reporter=ConsoleReporter(console))
        orchestrator.run()
    except GitUpError as e:
        report_error(console, e)
        raise SystemExit(1)
    except GitError as e:
        console.print(f"[error]{escape(str(e))}[/]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
