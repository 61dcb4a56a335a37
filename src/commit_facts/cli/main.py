"""Main CLI interface for Commit Facts."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from commit_facts import __version__
from commit_facts.core.config import load_config
from commit_facts.core.errors import CommitFactsError
from commit_facts.core.extractors import DEFAULT_COLUMNS, available_columns
from commit_facts.core.orchestrator import ExportRun
from commit_facts.models.summary import ExportSummary

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # GitPython is chatty at debug level
    logging.getLogger("git").setLevel(logging.WARNING)


def print_summary(summary: ExportSummary) -> None:
    table = Table(title="Export summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Output", str(summary.output_path))
    table.add_row("Pages fetched", str(summary.pages_fetched))
    table.add_row("Commits extracted", str(summary.commits_extracted))
    table.add_row("Rows written", str(summary.rows_written))
    table.add_row("Rows failed", str(summary.rows_failed))
    table.add_row("Failed values", str(summary.failed_values))
    console.print(table)


@click.group()
@click.version_option(__version__)
def main():
    """Commit Facts - export facts about every commit of a repository as CSV."""


@main.command()
@click.option("--remote", help="Repository URL or path to clone [env: REMOTE]")
@click.option(
    "--since",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Only commits authored after this date [env: SINCE]",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="CSV file to write [env: OUTPUT, default: output.csv]",
)
@click.option(
    "--chunk-size",
    type=int,
    help="Commits fetched per history page [env: CHUNK_SIZE, default: 100]",
)
@click.option(
    "--column",
    "-c",
    "columns",
    multiple=True,
    type=click.Choice(available_columns()),
    help=f"Column to export, repeatable (default: {', '.join(DEFAULT_COLUMNS)})",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every record and step")
def export(
    remote: Optional[str],
    since,
    output_path: Optional[Path],
    chunk_size: Optional[int],
    columns: Tuple[str, ...],
    verbose: bool,
):
    """Clone a repository and write one CSV row per commit."""
    configure_logging(verbose)

    try:
        config = load_config(
            remote=remote,
            since=since.date() if since else None,
            output_path=output_path,
            chunk_size=chunk_size,
            columns=columns,
        )
        summary = ExportRun(config, logging.getLogger("commit_facts")).run()
    except CommitFactsError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    print_summary(summary)


@main.command()
def columns():
    """List the columns that can be exported."""
    for name in available_columns():
        marker = " (default)" if name in DEFAULT_COLUMNS else ""
        console.print(f"{name}{marker}")


if __name__ == "__main__":
    main()
