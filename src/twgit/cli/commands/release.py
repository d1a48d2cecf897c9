"""Release branch commands."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, print_branch_summaries, report_start, run_or_exit
from twgit.core.errors import WorkflowError
from twgit.workflow import BranchType, BumpType, WorkflowOrchestrator

app = typer.Typer(help="Manage release branches", no_args_is_help=True)


def _current_release(orchestrator: WorkflowOrchestrator, version: str | None) -> str:
    if version:
        return version
    current = orchestrator.auditor.current_release_in_progress()
    if current is None:
        raise WorkflowError("No release in progress.", command=f"{orchestrator.context.command} release start")
    return current


@app.command("start")
def start(
    version: Annotated[str | None, typer.Argument(help="Release version, defaults to the next one")] = None,
    bump: Annotated[BumpType, typer.Option("--bump", "-b", help="Component to increment")] = BumpType.MINOR,
    delete: Annotated[bool, typer.Option("--delete", "-d", help="Delete the local branch first")] = False,
    silent: Annotated[bool, typer.Option("--silent", "-s", help="Never ask for confirmation")] = False,
) -> None:
    """Create, track or resume the release branch."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        result = orchestrator.start_release(version, bump, delete_local=delete, interactive=not silent)
        report_start(orchestrator, result, BranchType.RELEASE)

    run_or_exit(_run)


@app.command("finish")
def finish(version: Annotated[str | None, typer.Argument(help="Release version")] = None) -> None:
    """Merge the release into stable, tag it and remove it."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        tag = orchestrator.finish_branch(BranchType.RELEASE, _current_release(orchestrator, version))
        orchestrator.reporter.info(f"Release finished, tag {tag} pushed.")

    run_or_exit(_run)


@app.command("remove")
def remove(version: Annotated[str, typer.Argument(help="Release version")]) -> None:
    """Delete a release branch locally and on the remote."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        branch = orchestrator.remove_simple_branch(BranchType.RELEASE, version)
        orchestrator.reporter.info(f"Release {branch} removed.")

    run_or_exit(_run)


@app.command("list")
def list_releases() -> None:
    """Describe releases in progress and the features merged into them."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        releases = orchestrator.auditor.releases_in_progress()
        print_branch_summaries(orchestrator, releases)
        for release in releases:
            features = orchestrator.auditor.features_merged_into(release)
            if features:
                orchestrator.reporter.help(f"Features merged into {release}: {', '.join(features)}")

    run_or_exit(_run)


@app.command("committers")
def committers(version: Annotated[str | None, typer.Argument(help="Release version")] = None) -> None:
    """Rank the authors of a release by number of commits."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        branch = orchestrator.branch_name(_current_release(orchestrator, version), BranchType.RELEASE)
        ranking = orchestrator.auditor.contributors(orchestrator.context.remote_ref(branch))
        orchestrator.reporter.table(
            [(count, author) for author, count in ranking.items()],
            headers=("nb commits", "author"),
        )

    run_or_exit(_run)
