"""Run the MCP stdio server."""

import asyncio

import typer

from veracode_mcp.config import get_log_level
from veracode_mcp.core.errors import ConfigurationError
from veracode_mcp.utils.debug import set_debug_enabled
from veracode_mcp.utils.logging_setup import configure_logging

from .deps import cli_module
from .shared import app, console


@app.command()
def serve(
    debug: bool = typer.Option(False, "--debug", help="Log requests and tool timings to stderr"),
) -> None:
    """Serve the tools over MCP stdio."""
    cli = cli_module()
    level = "DEBUG" if debug else get_log_level()
    configure_logging(level)
    set_debug_enabled(level == "DEBUG")

    try:
        client = cli.build_client()
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    try:
        asyncio.run(cli.serve(client))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")
