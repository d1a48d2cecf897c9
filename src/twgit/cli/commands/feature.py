"""Feature branch commands."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, print_branch_summaries, report_start, run_or_exit
from twgit.workflow import BranchType

app = typer.Typer(help="Manage feature branches", no_args_is_help=True)


@app.command("start")
def start(
    name: Annotated[str, typer.Argument(help="Feature name or issue id, with or without prefix")],
    delete: Annotated[bool, typer.Option("--delete", "-d", help="Delete the local branch first")] = False,
    silent: Annotated[bool, typer.Option("--silent", "-s", help="Never ask for confirmation")] = False,
) -> None:
    """Create, track or resume a feature branch."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        result = orchestrator.start_simple_branch(BranchType.FEATURE, name, delete_local=delete, interactive=not silent)
        report_start(orchestrator, result, BranchType.FEATURE)

    run_or_exit(_run)


@app.command("push")
def push() -> None:
    """Push the current feature branch to the remote."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        branch = orchestrator.push_feature()
        orchestrator.reporter.info(f"Feature {branch} pushed.")

    run_or_exit(_run)


@app.command("remove")
def remove(name: Annotated[str, typer.Argument(help="Feature name")]) -> None:
    """Delete a feature branch locally and on the remote."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        branch = orchestrator.remove_simple_branch(BranchType.FEATURE, name)
        orchestrator.reporter.info(f"Feature {branch} removed.")

    run_or_exit(_run)


@app.command("list")
def list_features(
    not_merged: Annotated[
        bool, typer.Option("--not-merged", "-x", help="Only features not yet merged into stable")
    ] = False,
) -> None:
    """Describe remote feature branches."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        auditor = orchestrator.auditor
        branches = auditor.features_not_merged() if not_merged else auditor.features()
        print_branch_summaries(orchestrator, branches)

    run_or_exit(_run)


@app.command("subject")
def subject(name: Annotated[str, typer.Argument(help="Feature name or issue id")]) -> None:
    """Print the subject of a feature."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        text = orchestrator.feature_subject(orchestrator.branch_name(name, BranchType.FEATURE))
        if text:
            orchestrator.reporter.info(text)
        else:
            orchestrator.reporter.warning(f"No subject found for feature {name}.")

    run_or_exit(_run)


@app.command("committers")
def committers(name: Annotated[str, typer.Argument(help="Feature name")]) -> None:
    """Rank the authors of a feature by number of commits."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        branch = orchestrator.branch_name(name, BranchType.FEATURE)
        ranking = orchestrator.auditor.contributors(orchestrator.context.remote_ref(branch))
        orchestrator.reporter.table(
            [(count, author) for author, count in ranking.items()],
            headers=("nb commits", "author"),
        )

    run_or_exit(_run)
