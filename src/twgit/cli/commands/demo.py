"""Demo branch commands."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, print_branch_summaries, report_start, run_or_exit
from twgit.workflow import BranchType

app = typer.Typer(help="Manage demo branches", no_args_is_help=True)


@app.command("start")
def start(
    name: Annotated[str, typer.Argument(help="Demo name, with or without prefix")],
    delete: Annotated[bool, typer.Option("--delete", "-d", help="Delete the local branch first")] = False,
    silent: Annotated[bool, typer.Option("--silent", "-s", help="Never ask for confirmation")] = False,
) -> None:
    """Create, track or resume a demo branch."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        result = orchestrator.start_simple_branch(BranchType.DEMO, name, delete_local=delete, interactive=not silent)
        report_start(orchestrator, result, BranchType.DEMO)

    run_or_exit(_run)


@app.command("remove")
def remove(name: Annotated[str, typer.Argument(help="Demo name")]) -> None:
    """Delete a demo branch locally and on the remote."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        branch = orchestrator.remove_simple_branch(BranchType.DEMO, name)
        orchestrator.reporter.info(f"Demo {branch} removed.")

    run_or_exit(_run)


@app.command("list")
def list_demos() -> None:
    """Describe remote demo branches."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        prefix = orchestrator.context.remote_ref(orchestrator.registry.resolve_prefix(BranchType.DEMO))
        demos = [branch for branch in orchestrator.git.remote_branches() if branch.startswith(prefix)]
        print_branch_summaries(orchestrator, demos)

    run_or_exit(_run)
