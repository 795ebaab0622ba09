"""git-up configuration, read from `git config` under the git-up namespace.

Set values per repository or globally, e.g.:

    git config --global git-up.sort true
    git config git-up.fetch.prune false
"""

import logging
import os
from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gitup.git.port import VersionControlPort

logger = logging.getLogger(__name__)

CONFIG_NAMESPACE = "git-up"

# Deprecated in favour of `git config git-up.bundler.check`
BUNDLER_CHECK_ENV = "GIT_UP_BUNDLER_CHECK"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Interpret a git config boolean; None when unset or unrecognised."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("Ignoring non-boolean git-up config value: %r", value)
    return None


@dataclass
class GitUpConfig:
    """Options for a git-up run.

    fetch_prune stays tri-state: None means "not configured", which lets
    the prune version check tell a default apart from an explicit "true".
    """
    sort: bool = False
    fetch_all: bool = False
    fetch_prune: Optional[bool] = None
    log_hook: Optional[str] = None
    bundler_check: bool = False
    bundler_autoinstall: bool = False
    bundler_check_from_env: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GitUpConfig":
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })

    @classmethod
    def load(cls, port: "VersionControlPort", environ: Optional[dict] = None) -> "GitUpConfig":
        """Read every git-up.* key through the repository's config lookup."""
        env = os.environ if environ is None else environ

        def get(key: str) -> Optional[str]:
            return port.config_get(f"{CONFIG_NAMESPACE}.{key}")

        log_hook = get("log-hook")
        bundler_check = parse_bool(get("bundler.check")) is True
        env_check = BUNDLER_CHECK_ENV in env
        if env.get(BUNDLER_CHECK_ENV) == "true":
            bundler_check = True

        return cls(
            sort=parse_bool(get("sort")) is True,
            fetch_all=parse_bool(get("fetch.all")) is True,
            fetch_prune=parse_bool(get("fetch.prune")),
            log_hook=log_hook or None,
            bundler_check=bundler_check,
            bundler_autoinstall=parse_bool(get("bundler.autoinstall")) is True,
            bundler_check_from_env=env_check,
        )
