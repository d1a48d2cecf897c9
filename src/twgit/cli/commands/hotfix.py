"""Hotfix branch commands."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, print_branch_summaries, report_start, run_or_exit
from twgit.core.errors import WorkflowError
from twgit.workflow import BranchType

app = typer.Typer(help="Manage hotfix branches", no_args_is_help=True)


@app.command("start")
def start(
    delete: Annotated[bool, typer.Option("--delete", "-d", help="Delete the local branch first")] = False,
    silent: Annotated[bool, typer.Option("--silent", "-s", help="Never ask for confirmation")] = False,
) -> None:
    """Create, track or resume the hotfix for the next revision."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        result = orchestrator.start_hotfix(delete_local=delete, interactive=not silent)
        report_start(orchestrator, result, BranchType.HOTFIX)

    run_or_exit(_run)


@app.command("finish")
def finish(version: Annotated[str | None, typer.Argument(help="Hotfix version")] = None) -> None:
    """Merge the hotfix into stable, tag it and remove it."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        name = version
        if not name:
            hotfixes = orchestrator.auditor.hotfixes_in_progress()
            if not hotfixes:
                raise WorkflowError("No hotfix in progress.", command=f"{orchestrator.context.command} hotfix start")
            name = hotfixes[0].split("/", 1)[1]
        tag = orchestrator.finish_branch(BranchType.HOTFIX, name)
        orchestrator.reporter.info(f"Hotfix finished, tag {tag} pushed.")

    run_or_exit(_run)


@app.command("remove")
def remove(version: Annotated[str, typer.Argument(help="Hotfix version")]) -> None:
    """Delete a hotfix branch locally and on the remote."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        branch = orchestrator.remove_simple_branch(BranchType.HOTFIX, version)
        orchestrator.reporter.info(f"Hotfix {branch} removed.")

    run_or_exit(_run)


@app.command("list")
def list_hotfixes() -> None:
    """Describe hotfixes in progress."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        print_branch_summaries(orchestrator, orchestrator.auditor.hotfixes_in_progress())

    run_or_exit(_run)
