"""Branch hygiene report."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit.cli.helpers import build_orchestrator, run_or_exit


def check(
    strict: Annotated[bool, typer.Option("--strict", help="Exit with 1 when problems are found")] = False,
) -> None:
    """Report remote branches outside the naming convention and ambiguous names."""

    def _run() -> bool:
        orchestrator = build_orchestrator()
        orchestrator.fetch()
        reporter = orchestrator.reporter
        auditor = orchestrator.auditor

        dissidents = auditor.dissident_branches()
        if dissidents:
            reporter.warning("Following branches are out of process:")
            reporter.table([(branch,) for branch in dissidents], headers=("branch",))

        ambiguous = auditor.ambiguous_names()
        if ambiguous:
            reporter.warning("Following names are used by both a branch and a tag:")
            reporter.table([(name, count) for name, count in ambiguous.items()], headers=("name", "occurrences"))

        if not dissidents and not ambiguous:
            reporter.info("All branches follow the workflow.")
        return bool(dissidents or ambiguous)

    if run_or_exit(_run) and strict:
        raise typer.Exit(1)
