"""Tag commands."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, run_or_exit

app = typer.Typer(help="Inspect and create version tags", no_args_is_help=True)


@app.command("list")
def list_tags() -> None:
    """List version tags, oldest first."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        tags = orchestrator.git.sorted_tags(f"{orchestrator.tags.tag_prefix}*")
        if not tags:
            orchestrator.reporter.info("No tag exists.")
            return
        for tag in tags:
            orchestrator.reporter.info(tag)

    run_or_exit(_run)


@app.command("last")
def last() -> None:
    """Print the most recent version tag."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        orchestrator.reporter.info(orchestrator.assert_tag_exists())

    run_or_exit(_run)


@app.command("create")
def create(
    version: Annotated[str, typer.Argument(help="Version, e.g. 1.2.3")],
    message: Annotated[str | None, typer.Option("--message", "-m", help="Tag comment")] = None,
) -> None:
    """Tag the stable branch and push the tag."""

    def _run() -> None:
        orchestrator = build_orchestrator()
        tag = orchestrator.create_tag(version, message)
        orchestrator.reporter.info(f"Tag {tag} created and pushed.")

    run_or_exit(_run)
