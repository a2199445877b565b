"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from qaskills.skills.models import InstallOutcome, QualityBreakdown

# Global console instances
console = Console()
err_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_table(
    headers: list[str],
    rows: list[list[Any]],
    title: str | None = None,
) -> None:
    """Print a table."""
    table = Table(title=title)

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_outcomes(outcomes: list[InstallOutcome], verb: str) -> None:
    """Print one line per agent outcome."""
    for outcome in outcomes:
        if outcome.ok:
            print_success(f"{verb} for {outcome.agent.name} → {outcome.path}")
        else:
            print_error(f"{outcome.agent.name}: {outcome.error}")


def print_breakdown(breakdown: QualityBreakdown) -> None:
    """Print a quality score breakdown table."""
    print_table(
        ["Category", "Score"],
        [
            ["Schema", f"{breakdown.schema}/30"],
            ["Documentation", f"{breakdown.documentation}/30"],
            ["Completeness", f"{breakdown.completeness}/25"],
            ["Freshness", f"{breakdown.freshness}/15"],
            ["Total", f"{breakdown.total}/100"],
        ],
        title="Quality Score",
    )


def setup_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    handler = RichHandler(
        console=err_console,
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[handler], force=True)
