"""Rich-powered console output for Contextify."""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from contextify.context.models import ContextPackage
from contextify.context.tracer import TraceResult


class Console:
    """Terminal output for Contextify using Rich. Writes to stderr so that
    rendered context can go to stdout untouched."""

    def __init__(self) -> None:
        self.console = RichConsole(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def extraction_progress(self) -> Progress:
        """Create a progress bar for file extraction."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    def show_stats(self, package: ContextPackage, graph_stats: dict | None = None) -> None:
        """Display extraction (and symbol graph) statistics in a table."""
        table = Table(title="Context Statistics", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="cyan")

        table.add_row("Files", str(package.total_files))
        table.add_row("Total Size", f"{package.total_size:,} bytes")
        table.add_row("Estimated Tokens", f"{package.estimated_tokens:,}")
        table.add_row("Truncated", "yes" if package.truncated else "no")

        if graph_stats:
            table.add_section()
            table.add_row("Go Units Analyzed", str(graph_stats.get("units", 0)))
            table.add_row("Parse Failures", str(graph_stats.get("failed_units", 0)))
            table.add_row("Declarations", str(graph_stats.get("declarations", 0)))
            table.add_row("Call Edges", str(graph_stats.get("call_edges", 0)))
            table.add_row("Key Collisions", str(graph_stats.get("collisions", 0)))

        self.console.print(table)

    def show_trace(self, trace: TraceResult) -> None:
        """Display which declarations a focus trace reached."""
        if not trace.found:
            self.warning(f"Focus symbol '{trace.focus}' matched no declarations")
            return

        table = Table(
            title=f"Focus: {trace.focus} (depth {trace.depth})", border_style="magenta"
        )
        table.add_column("Unit", style="cyan")
        table.add_column("Forward", justify="right")
        table.add_column("Backward", justify="right")

        for path in sorted(trace.increments()):
            table.add_row(
                path,
                str(trace.forward.get(path, 0)),
                str(trace.backward.get(path, 0)),
            )
        self.console.print(table)


def configure_logging(console: Console, verbose: bool = False) -> logging.Logger:
    """Route the contextify logger hierarchy through Rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("contextify")
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate handlers when the CLI is invoked repeatedly (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=console.console, show_path=False, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
