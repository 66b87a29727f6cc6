"""veracode-mcp CLI - Veracode findings and policy data as MCP tools."""

from veracode_mcp.cli_commands import call_command, info_commands, serve_command  # noqa: F401
from veracode_mcp.cli_commands.shared import app, build_client, console, parse_tool_arguments
from veracode_mcp.server import serve

__all__ = ["app", "build_client", "console", "main", "parse_tool_arguments", "serve"]


def main():
    """Entry point for the CLI."""
    app()
