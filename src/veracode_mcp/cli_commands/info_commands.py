"""Version, tool catalogue and configuration commands."""

import typer
from rich.table import Table

from veracode_mcp.config import (
    get_api_base_url,
    get_config,
    get_global_config_path,
    get_log_level,
    get_platform_url,
    get_request_timeout,
    mask_secret,
)
from veracode_mcp.tools import get_all_tools, get_tool

from .shared import app, console


@app.command()
def version() -> None:
    """Show the installed veracode-mcp version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version

    try:
        current_version = pkg_version("veracode-mcp")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"veracode-mcp {current_version}")


@app.command()
def tools(
    name: str | None = typer.Argument(None, help="Show the input schema of one tool"),
) -> None:
    """List the available tools."""
    if name:
        definition = get_tool(name)
        if definition is None:
            console.print(f"[red]Unknown tool: {name}[/red]")
            raise typer.Exit(1)
        console.print(f"[bold]{definition['name']}[/bold]")
        console.print(definition["description"])
        console.print_json(data=definition["input_schema"])
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    for definition in get_all_tools():
        table.add_row(definition["name"], definition["description"].split(". ")[0])
    console.print(table)


@app.command()
def config() -> None:
    """Show the effective configuration (secrets masked)."""
    console.print("[bold]Effective configuration:[/bold]")
    console.print(f"  Global config: {get_global_config_path()}")
    for key in ("VERACODE_API_ID", "VERACODE_API_KEY"):
        shown = mask_secret(get_config(key)) or "[dim]not set[/dim]"
        console.print(f"  {key}: {shown}")
    console.print(f"  API base URL: {get_api_base_url()}")
    console.print(f"  Platform URL: {get_platform_url()}")
    console.print(f"  Timeout: {get_request_timeout()}s")
    console.print(f"  Log level: {get_log_level()}")
