"""Git command execution and the read-only queries built on it.

Every call is a blocking ``git`` subprocess.  The workflow engine only ever
interprets the exit code and the captured text; it never touches the object
database itself.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import ShellError, WorkflowError

__all__ = ["CommandResult", "GitRunner", "Git"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Normalized outcome of one git invocation."""

    exit_code: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def stdout_lines(self) -> list[str]:
        return [line for line in self.stdout.splitlines() if line.strip()]

    @property
    def last_line(self) -> str:
        lines = self.stdout_lines
        return lines[-1].strip() if lines else ""


class GitRunner:
    """Run ``git`` with captured output inside a working directory."""

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def run(
        self,
        args: Sequence[str],
        *,
        failure_message: str | None = None,
        fatal: bool = True,
    ) -> CommandResult:
        """Run ``git <args>``.

        A non-zero exit raises ``ShellError`` unless ``fatal`` is False, in
        which case the failing result is returned to the caller.
        """
        argv = ["git", *args]
        logger.debug("$ %s", shlex.join(argv))
        try:
            completed = subprocess.run(
                argv,
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
            result = CommandResult(
                exit_code=completed.returncode,
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
            )
        except FileNotFoundError:
            result = CommandResult(exit_code=127, stdout="", stderr="git executable not found on PATH")

        if result.exit_code != 0:
            logger.debug("exit %d: %s", result.exit_code, result.stderr.strip())
            if fatal:
                raise ShellError(
                    failure_message or f"Command failed: {shlex.join(argv)}",
                    argv=argv,
                    exit_code=result.exit_code,
                    stderr=result.stderr,
                )
        return result


def _strip_ref_namespace(refs: list[str], namespace: str) -> list[str]:
    names = []
    for ref in refs:
        ref = ref.strip()
        if ref.startswith(namespace):
            names.append(ref[len(namespace):])
    return names


class Git:
    """Read helpers over a command runner.

    ``runner`` only needs a ``run(args, *, failure_message, fatal)`` method,
    so tests can substitute a scripted fake.
    """

    def __init__(self, runner) -> None:
        self.runner = runner

    def run(
        self,
        args: Sequence[str],
        *,
        failure_message: str | None = None,
        fatal: bool = True,
    ) -> CommandResult:
        return self.runner.run(args, failure_message=failure_message, fatal=fatal)

    def is_inside_work_tree(self) -> bool:
        result = self.run(["rev-parse", "--is-inside-work-tree"], fatal=False)
        return result.ok and result.last_line.lower() == "true"

    def repository_root(self) -> Path:
        result = self.run(
            ["rev-parse", "--show-toplevel"],
            failure_message="Not inside a git repository.",
        )
        return Path(result.last_line)

    def rev_parse(self, ref: str) -> str:
        """Return the commit id ``ref`` points to (tags are peeled)."""
        return self.run(
            ["rev-parse", "--verify", "-q", f"{ref}^{{commit}}"],
            failure_message=f'Unknown reference "{ref}".',
        ).last_line

    def merge_base(self, rev1: str, rev2: str) -> str | None:
        result = self.run(["merge-base", rev1, rev2], fatal=False)
        if not result.ok:
            return None
        return result.last_line

    def local_branches(self) -> list[str]:
        result = self.run(["for-each-ref", "--format=%(refname)", "refs/heads/"])
        return _strip_ref_namespace(result.stdout_lines, "refs/heads/")

    def remote_branches(self) -> list[str]:
        result = self.run(["for-each-ref", "--format=%(refname)", "refs/remotes/"])
        names = _strip_ref_namespace(result.stdout_lines, "refs/remotes/")
        return [name for name in names if not name.endswith("/HEAD")]

    def tags(self) -> list[str]:
        result = self.run(["for-each-ref", "--format=%(refname)", "refs/tags/"])
        return _strip_ref_namespace(result.stdout_lines, "refs/tags/")

    def sorted_tags(self, pattern: str) -> list[str]:
        """Tags matching ``pattern`` in git's version order, oldest first."""
        result = self.run(["tag", "--list", pattern, "--sort=v:refname"])
        return [line.strip() for line in result.stdout_lines]

    def current_branch(self) -> str:
        result = self.run(["symbolic-ref", "--short", "-q", "HEAD"], fatal=False)
        if not result.ok or not result.last_line:
            raise WorkflowError("Failed to get current branch.")
        return result.last_line

    def get_config(self, key: str) -> str:
        return self.run(["config", "--get", key], fatal=False).last_line

    def remote_url(self, remote: str) -> str | None:
        result = self.run(["remote", "get-url", remote], fatal=False)
        return result.last_line if result.ok else None

    def working_tree_changes(self) -> list[str]:
        result = self.run(["status", "--porcelain", "--untracked-files=all", "--ignore-submodules=all"])
        return result.stdout_lines

    def has_commits(self) -> bool:
        return self.run(["rev-parse", "--verify", "-q", "HEAD"], fatal=False).ok
