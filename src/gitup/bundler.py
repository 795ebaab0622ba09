"""Post-sync check for missing Ruby gems.

Enabled per project with `git config git-up.bundler.check true`. When the
repository has a Gemfile and `bundle check` reports missing gems, git-up
either runs `bundle install` (git-up.bundler.autoinstall) or says so.
"""

import logging
import subprocess
from pathlib import Path

from gitup.core.config import BUNDLER_CHECK_ENV, GitUpConfig
from gitup.ui.reporter import Reporter

logger = logging.getLogger(__name__)

ENV_DEPRECATION = f"""\
The {BUNDLER_CHECK_ENV} environment variable is deprecated.
You can now tell git-up to check (or not check) for missing
gems on a per-project basis using git's config system. To
set it globally, run this command anywhere:

    git config --global git-up.bundler.check true

To set it within a project, run this command inside that
project's directory:

    git config git-up.bundler.check true

Replace 'true' with 'false' to disable checking."""


def gems_missing(workspace: Path) -> bool:
    """Ask bundler whether the Gemfile's dependencies are satisfied."""
    result = subprocess.run(
        ["bundle", "check"],
        cwd=workspace,
        capture_output=True,
        text=True,
    )
    return result.returncode != 0


def check_bundler(config: GitUpConfig, workspace: Path, reporter: Reporter) -> bool:
    """Run the bundler check if enabled.

    Returns:
        True if gems were found missing
    """
    if config.bundler_check_from_env:
        reporter.warning(ENV_DEPRECATION)

    if not config.bundler_check or not (workspace / "Gemfile").exists():
        return False

    try:
        if not gems_missing(workspace):
            return False
    except FileNotFoundError:
        reporter.warning("bundler.check is enabled but `bundle` was not found in PATH.")
        return False

    if config.bundler_autoinstall:
        reporter.warning("Gems are missing. Running `bundle install`.")
        result = subprocess.run(["bundle", "install"], cwd=workspace)
        if result.returncode != 0:
            logger.warning("bundle install exited with %d", result.returncode)
    else:
        reporter.warning("Gems are missing. You should `bundle install`.")
    return True
