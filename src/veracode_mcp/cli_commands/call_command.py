"""Invoke a single tool from the command line."""

import asyncio
import json
from typing import Any

import typer

from veracode_mcp.config import get_log_level
from veracode_mcp.core.errors import ConfigurationError
from veracode_mcp.tools import ToolContext, dispatch_tool
from veracode_mcp.utils.debug import set_debug_enabled

from .deps import cli_module
from .shared import app, console, parse_tool_arguments


async def _run_tool(client: Any, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    async with client:
        return await dispatch_tool(name, arguments, ToolContext.from_client(client))


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. get-findings"),
    args: str | None = typer.Option(None, "--args", "-a", help="Tool arguments as a JSON object"),
    arg: list[str] | None = typer.Option(
        None, "--arg", help="Single argument as key=value (repeatable)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Print request and timing details"),
) -> None:
    """Run one tool and print its result envelope as JSON."""
    cli = cli_module()
    arguments = parse_tool_arguments(args, arg)
    set_debug_enabled(debug or get_log_level() == "DEBUG")

    try:
        client = cli.build_client()
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    envelope = asyncio.run(_run_tool(client, name, arguments))
    typer.echo(json.dumps(envelope, indent=2, default=str))
    if not envelope.get("success"):
        raise typer.Exit(1)
