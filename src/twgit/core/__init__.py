"""Core utilities: errors, defaults and the git command runner."""

from .errors import ConfigurationError, ConnectorError, ShellError, TwgitError, WorkflowError
from .git import CommandResult, Git, GitRunner

__all__ = [
    "CommandResult",
    "ConfigurationError",
    "ConnectorError",
    "Git",
    "GitRunner",
    "ShellError",
    "TwgitError",
    "WorkflowError",
]
