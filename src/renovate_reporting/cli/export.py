"""Export CLI command -- send a saved JSON report through a configured sink."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..aggregator import StatsAggregator
from ..config import REPORT_TYPES
from ..exceptions import ReportingError
from ..export import ExportDispatcher, ExportOutcome
from ..logging_config import setup_logging
from . import app
from ._common import console, load_report, resolve_config


@app.command()
def export(
    report_file: Path = typer.Argument(
        ...,
        help="JSON report written by the file or s3 sink",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    report_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Sink: logging | file | mailing-list | s3",
        click_type=click.Choice(list(REPORT_TYPES)),
    ),
    report_path: Optional[str] = typer.Option(
        None,
        "--path",
        "-p",
        help="Output file, mailing-list file or s3://bucket/key URL",
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
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
):
    """
    Export a saved report through the logging, file, mailing-list or s3 sink.

    With the mailing-list sink and mailing_list_git_repo set, the rendered
    email is also committed and pushed to the configured branch.

    [bold cyan]Examples:[/bold cyan]

      renovate-reporting export report.json --type logging

      renovate-reporting export report.json --type s3 --path s3://bucket/renovate/report.json
    """
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, report_type=report_type, report_path=report_path)
        report = load_report(report_file)
    except ReportingError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    result = ExportDispatcher(StatsAggregator.from_report(report)).export_stats(settings)

    if result.outcome is ExportOutcome.DISABLED:
        console.print("[yellow]Reporting is disabled:[/yellow] set report_type or pass --type")
        return
    if not result.ok:
        # already logged as a warning
        console.print(f"[yellow]Export failed:[/yellow] {escape(result.detail or '')}")
        return

    console.print(f"Export via [bold]{result.sink}[/bold]: {result.outcome.value}")
    if result.detail:
        console.print(f"  {escape(result.detail)}")
    if result.publish is not None:
        line = f"  git: {result.publish.outcome.value}"
        if result.publish.branch:
            line += f" ({escape(result.publish.branch)})"
        console.print(line)
