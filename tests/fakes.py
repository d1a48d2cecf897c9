"""Scripted stand-ins for the workflow's collaborators."""

from __future__ import annotations

from collections.abc import Sequence

from twgit.core.errors import ShellError
from twgit.core.git import CommandResult


class FakeRunner:
    """Scripted command runner keyed by the git argument tuple."""

    def __init__(self, responses: dict[tuple[str, ...], CommandResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def add(self, args: Sequence[str], stdout: str = "", exit_code: int = 0, stderr: str = "") -> None:
        self.responses[tuple(args)] = CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr)

    def run(self, args, *, failure_message=None, fatal=True) -> CommandResult:
        key = tuple(args)
        self.calls.append(key)
        result = self.responses.get(key, CommandResult(exit_code=0, stdout=""))
        if fatal and not result.ok:
            raise ShellError(failure_message or "failed", argv=("git", *key), exit_code=result.exit_code)
        return result


class RecordingReporter:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.messages: list[tuple[str, str]] = []
        self.tables: list[tuple[list, tuple]] = []
        self.questions: list[str] = []

    def _record(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def processing(self, message: str) -> None:
        self._record("processing", message)

    def info(self, message: str) -> None:
        self._record("info", message)

    def help(self, message: str) -> None:
        self._record("help", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def table(self, rows, headers) -> None:
        self.tables.append((list(rows), tuple(headers)))

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer

    def of(self, level: str) -> list[str]:
        return [message for kind, message in self.messages if kind == level]


class RecordingConnector:
    def __init__(self, titles: dict[str, str] | None = None) -> None:
        self.titles = titles or {}
        self.calls: list[str] = []

    def get_issue_title(self, issue_id: str) -> str:
        self.calls.append(issue_id)
        return self.titles.get(issue_id, "")
