"""Shared plumbing for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from twgit.config import load_config
from twgit.connectors import build_connector
from twgit.core.errors import TwgitError, WorkflowError
from twgit.core.git import Git, GitRunner
from twgit.workflow import (
    BranchType,
    FeatureSubjectCache,
    StartOutcome,
    StartResult,
    WorkflowContext,
    WorkflowOrchestrator,
    subject_cache_path,
)

from .reporter import ConsoleReporter, console

__all__ = [
    "build_orchestrator",
    "configure_logging",
    "print_branch_summaries",
    "report_start",
    "run_or_exit",
]

T = TypeVar("T")


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr; DEBUG shows every git invocation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def run_or_exit(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except TwgitError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        if exc.command:
            console.print(f"[cyan]Try: {escape(exc.command)}[/cyan]")
        raise typer.Exit(1) from exc


def build_orchestrator(cwd: Path | None = None, *, require_repository: bool = True) -> WorkflowOrchestrator:
    """Wire config, git, connector and subject cache for the current repository."""
    cwd = cwd or Path.cwd()
    git = Git(GitRunner(cwd))
    reporter = ConsoleReporter()

    if not git.is_inside_work_tree():
        if require_repository:
            raise WorkflowError(
                "Not inside a git repository.",
                command="twgit init <tagname> <url>",
            )
        context = WorkflowContext.from_config(load_config(cwd))
        return WorkflowOrchestrator(context, git, reporter)

    repo_root = git.repository_root()
    config = load_config(repo_root)
    context = WorkflowContext.from_config(config)
    subjects = FeatureSubjectCache(
        subject_cache_path(repo_root, context.subject_filename),
        context.registry,
        context.origin,
        build_connector(config.connector),
    )
    return WorkflowOrchestrator(context, Git(GitRunner(repo_root)), reporter, subjects)


def report_start(orchestrator: WorkflowOrchestrator, result: StartResult, branch_type: BranchType) -> None:
    reporter = orchestrator.reporter
    if result.outcome is StartOutcome.RESUMED:
        reporter.info(f"Resumed {branch_type} {result.branch}.")
    elif result.outcome is StartOutcome.LOCAL_ONLY:
        return
    elif result.outcome is StartOutcome.TRACKED:
        reporter.info(f"Now tracking remote {branch_type} {orchestrator.context.remote_ref(result.branch)}.")
    else:
        reporter.info(f"{branch_type.value.capitalize()} {result.branch} created and pushed.")


def print_branch_summaries(orchestrator: WorkflowOrchestrator, branches: list[str]) -> None:
    reporter = orchestrator.reporter
    if not branches:
        reporter.info("No branch exists.")
        return

    for branch in branches:
        summary = orchestrator.describe_branch(branch)
        title = f"{summary.name}"
        if summary.origin_tag:
            title += f" (from tag {summary.origin_tag})"
        if summary.subject:
            title += f": {summary.subject}"
        reporter.info(title)
        for line in summary.excerpt:
            reporter.processing(f"  {line.strip()}")
        if summary.tags_not_merged:
            reporter.warning(f"Tags not merged into this branch: {', '.join(summary.tags_not_merged)}")
