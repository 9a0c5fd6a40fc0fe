"""Render CLI command -- turn a saved JSON report into a mailing-list email."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import ReportingError
from ..file_ops import write_system_file
from ..formatters import render_mailing_list_report
from . import app
from ._common import console, load_report, resolve_config


@app.command()
def render(
    report_file: Path = typer.Argument(
        ...,
        help="JSON report written by the file or s3 sink",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the email to this file instead of stdout",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Render a saved report as an RFC 822 mailing-list email.

    Addressing (From, To, Cc, Subject) comes from the mailing_list_* settings.

    [bold cyan]Examples:[/bold cyan]

      renovate-reporting render report.json

      renovate-reporting render report.json --output summary.eml
    """
    try:
        settings = resolve_config(config=config)
        report = load_report(report_file)
        document = render_mailing_list_report(settings, report)
        if output is not None:
            write_system_file(output, document)
            console.print(f"Mailing list report saved to: [bold green]{escape(str(output))}[/bold green]")
        else:
            typer.echo(document, nl=False)
    except ReportingError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
