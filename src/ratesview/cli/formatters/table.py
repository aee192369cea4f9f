"""Table formatter for CLI output."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ratesview.core.exceptions import ProtocolError
from ratesview.models.base import QueryStatus
from ratesview.models.rates import rate_rows
from ratesview.models.state import QueryState


def format_rates(console: Console, state: QueryState) -> None:
    """Display a query state as a rates table, an error panel or a placeholder."""
    if state.status == QueryStatus.FAILED:
        _format_error(console, state.error)
        return

    if state.status != QueryStatus.SUCCESS:
        console.print("[yellow]loading[/yellow]")
        return

    try:
        rows = rate_rows(state.data or {})
    except ProtocolError as e:
        _format_error(console, e)
        return

    table = Table(title=f"Exchange Rates ({len(rows)})")
    table.add_column("Currency", style="cyan")
    table.add_column("Rate", justify="right", style="green")
    table.add_column("Name")

    for row in rows:
        table.add_row(row.currency, row.rate_text, row.name)

    console.print(table)


def _format_error(console: Console, error: BaseException | None) -> None:
    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]",
            title="Error",
            border_style="red",
        )
    )
