"""Report rendering - rich tables and JSON-ready dicts."""

from typing import Any, Sequence

from rich.table import Table
from rich.text import Text

from envleak.reporting.report import ReportRow, Status
from envleak.tools import ToolReport

STATUS_STYLES = {
    Status.FOUND: "bold red",
    Status.NOT_FOUND: "bold green",
    Status.SKIPPED: "bold yellow",
    Status.NOT_APPLICABLE: "yellow",
}


def format_elapsed(seconds: float) -> str:
    return f"{seconds:.3f} seconds"


def render_report_table(rows: Sequence[ReportRow], title: str | None = None) -> Table:
    """Render report rows as a table.

    Args:
        rows: Ordered report rows.
        title: Optional table title.

    Returns:
        Table ready for Console.print.
    """
    table = Table(title=title, show_lines=True)
    table.add_column("Security/Privacy Check", style="cyan")
    table.add_column("Value")
    table.add_column("Status")
    table.add_column("Details", justify="right")
    table.add_column("Locations (file:lines)", overflow="fold")

    # Text keeps paths and values containing brackets from being read as markup.
    for row in rows:
        table.add_row(
            Text(row.category),
            Text(row.value),
            Text(row.status.value, style=STATUS_STYLES[row.status]),
            Text(row.details),
            Text(row.locations),
        )

    return table


def render_tools_table(report: ToolReport) -> Table:
    """Render tool-runner results with a total row."""
    table = Table(title="Tool Checks")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Time Elapsed", justify="right")

    for result in report.results:
        status = "[bold green]Success[/]" if result.ok else "[bold red]Failed[/]"
        table.add_row(Text(result.name), status, format_elapsed(result.elapsed))

    table.add_row(
        "[bold]Total time elapsed:[/]",
        "",
        f"[bold]{format_elapsed(report.total_elapsed)}[/]",
    )
    return table


def rows_to_dicts(rows: Sequence[ReportRow]) -> list[dict[str, Any]]:
    """Convert report rows to JSON-serialisable dicts."""
    return [row.to_dict() for row in rows]
