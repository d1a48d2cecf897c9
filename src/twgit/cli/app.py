"""Typer application wiring the command modules together."""

from __future__ import annotations

import typer
from typing_extensions import Annotated

from twgit import __version__

from .commands import check, demo, feature, hotfix, init, release, tag
from .helpers import configure_logging
from .reporter import console

app = typer.Typer(
    name="twgit",
    help="Branching workflow over git: features, releases, hotfixes, demos and tags",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(feature.app, name="feature")
app.add_typer(release.app, name="release")
app.add_typer(hotfix.app, name="hotfix")
app.add_typer(demo.app, name="demo")
app.add_typer(tag.app, name="tag")
app.command("init")(init)
app.command("check")(check)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"twgit {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every git invocation")] = False,
    version: Annotated[
        bool, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    configure_logging(verbose)


def main() -> None:
    app()
