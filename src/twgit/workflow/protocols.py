"""Collaborator interfaces the workflow engine depends on."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from twgit.core.git import CommandResult

__all__ = ["CommandRunner", "IssueConnector", "Reporter"]


class CommandRunner(Protocol):
    """Runs ``git <args>``; fatal failures raise ``ShellError``."""

    def run(
        self,
        args: Sequence[str],
        *,
        failure_message: str | None = None,
        fatal: bool = True,
    ) -> CommandResult:
        ...


class IssueConnector(Protocol):
    """Resolves an issue identifier to its title."""

    def get_issue_title(self, issue_id: str) -> str:
        ...


class Reporter(Protocol):
    """Operator-facing output channel."""

    def processing(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def help(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def table(self, rows: Sequence[Sequence[object]], headers: Sequence[str]) -> None:
        ...

    def confirm(self, question: str) -> bool:
        ...
