"""Exception hierarchy shared by the workflow engine and the CLI."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "TwgitError",
    "ConfigurationError",
    "ShellError",
    "WorkflowError",
    "ConnectorError",
]


class TwgitError(RuntimeError):
    """Base class for every error surfaced to the operator.

    ``command`` is an optional remediation the operator can run.
    """

    def __init__(self, message: str, command: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.command = command


class ConfigurationError(TwgitError):
    """Raised when a configuration value is missing or invalid."""


class WorkflowError(TwgitError):
    """Raised when a guard rejects the current repository state."""


class ConnectorError(TwgitError):
    """Raised when the issue tracker cannot be reached."""


class ShellError(TwgitError):
    """Raised when a fatal git invocation exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        exit_code: int = 1,
        stderr: str = "",
        command: str | None = None,
    ) -> None:
        super().__init__(message, command=command)
        self.argv = tuple(argv)
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        detail = self.stderr.strip().splitlines()
        if detail:
            return f"{self.message} ({detail[-1]})"
        return self.message
