"""git-up - fetch and rebase all locally-tracked remote branches."""

__version__ = "0.6.0"
