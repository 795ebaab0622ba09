"""git-up terminal output."""

from gitup.ui.theme import THEME, make_console
from gitup.ui.reporter import Reporter, ConsoleReporter, RecordingReporter

__all__ = [
    "THEME",
    "make_console",
    "Reporter",
    "ConsoleReporter",
    "RecordingReporter",
]
