"""Repository initialization command."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, run_or_exit


def init(
    tag_name: Annotated[str, typer.Argument(help="First version tag, e.g. 1.0.0")],
    url: Annotated[str | None, typer.Argument(help="Remote URL, when the remote is not configured yet")] = None,
) -> None:
    """Prepare the repository: remote, stable branch and first tag."""

    def _run() -> None:
        orchestrator = build_orchestrator(require_repository=False)
        tag = orchestrator.initialize(tag_name, url)
        orchestrator.reporter.info(f"Repository initialized, tag {tag} pushed.")

    run_or_exit(_run)
