"""Command line interface for twgit."""

from .app import app, main

__all__ = ["app", "main"]
