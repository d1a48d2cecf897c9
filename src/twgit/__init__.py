"""twgit: a git branching workflow for features, releases, hotfixes and demos."""

__version__ = "1.0.0"

from twgit.cli import app, main  # noqa: E402

__all__ = ["__version__", "app", "main"]
