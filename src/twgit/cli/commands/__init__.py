"""CLI command modules for twgit."""

from . import demo, feature, hotfix, release, tag
from .check import check
from .init import init

__all__ = ["check", "demo", "feature", "hotfix", "init", "release", "tag"]
