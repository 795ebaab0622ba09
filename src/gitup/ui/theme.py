"""Terminal colors for git-up.

Status lines use a small, fixed palette: green when nothing needed doing,
yellow while a branch is being changed, magenta for housekeeping (stash,
returning to a branch) and red for failures.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.style import Style
from rich.theme import Theme


@dataclass
class Palette:
    """git-up color palette."""

    OK = "green"
    BUSY = "yellow"
    HOUSEKEEPING = "magenta"
    ERROR = "red"
    TEXT_DIM = "bright_black"


THEME = Theme({
    # Per-branch status
    "status.ok": Style(color=Palette.OK),
    "status.busy": Style(color=Palette.BUSY),
    "status.failed": Style(color=Palette.ERROR, bold=True),

    # Run-level messages
    "housekeeping": Style(color=Palette.HOUSEKEEPING),
    "warning": Style(color=Palette.BUSY),
    "error": Style(color=Palette.ERROR),
    "text.dim": Style(color=Palette.TEXT_DIM),
})


def make_console(**kwargs) -> Console:
    """Console with the git-up theme applied."""
    return Console(theme=THEME, highlight=False, **kwargs)
