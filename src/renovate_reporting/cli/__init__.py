"""CLI entry point; registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="renovate-reporting",
    help="Renovate reporting - render and export dependency update run reports",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: Optional[bool]) -> None:
    if value:
        console.print(f"renovate-reporting {__version__}")
        raise typer.Exit()


@app.callback()
def _callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Render and export Renovate run reports."""


# Import subcommands to register them
from .render import render as _render  # noqa: F401, E402
from .export import export as _export  # noqa: F401, E402


def main() -> None:
    app()
