"""Main CLI application using Typer."""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ratesview.version import __version__
from ratesview.core.config import get_settings
from ratesview.core.logging import setup_logging
from ratesview.views.rates import RateView, render_page

app = typer.Typer(
    name="ratesview",
    help="ratesview - exchange rates from a GraphQL endpoint",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ratesview version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ratesview - exchange rates from a GraphQL endpoint."""
    setup_logging()


async def _fetch_rates(endpoint: str) -> RateView:
    """Mount the rate view once against a fresh client and wait for it."""
    from ratesview.graphql import build_client

    async with build_client(endpoint) as client:
        view = RateView(client)
        view.mount()
        try:
            await view.settle()
        finally:
            view.unmount()
        return view


@app.command()
def rates(
    endpoint: Annotated[
        Optional[str],
        typer.Option("--endpoint", "-e", help="GraphQL endpoint URL"),
    ] = None,
    format_type: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format: table, json"),
    ] = OutputFormat.TABLE,
    html_page: Annotated[
        Optional[Path],
        typer.Option("--html", help="Write the rendered HTML page to this path"),
    ] = None,
) -> None:
    """
    Fetch USD exchange rates and print them.

    Examples:
        ratesview rates
        ratesview rates --format json
        ratesview rates --html rates.html
    """
    from ratesview.cli.formatters import format_json, format_rates

    endpoint = endpoint or get_settings().graphql_endpoint

    with console.status("[bold green]Fetching rates...[/bold green]"):
        view = asyncio.run(_fetch_rates(endpoint))

    if html_page:
        html_page.write_text(render_page(view.html), encoding="utf-8")
        console.print(f"[green]HTML page saved to {html_page}[/green]")

    if format_type == OutputFormat.JSON:
        format_json(console, view.state)
    else:
        format_rates(console, view.state)

    if view.error is not None:
        raise typer.Exit(1)


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("GraphQL Endpoint", settings.graphql_endpoint)
    table.add_row("HTTP Timeout", f"{settings.http_timeout}s")
    table.add_row("Fetch Policy", settings.fetch_policy)
    table.add_row(
        "Cache TTL",
        f"{settings.cache_ttl}s" if settings.cache_ttl else "process lifetime",
    )
    table.add_row("API Host", settings.api_host)
    table.add_row("API Port", str(settings.api_port))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Format", settings.log_format)

    console.print(table)


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", "-r", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Serve the exchange rate page."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(
        Panel(
            f"[bold blue]Starting Server[/bold blue]\n"
            f"Host: [green]{host}[/green]\n"
            f"Port: [green]{port}[/green]\n"
            f"Page: [cyan]http://{host}:{port}/[/cyan]",
            title="ratesview",
        )
    )

    uvicorn.run(
        "ratesview.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
