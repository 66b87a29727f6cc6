"""Shared CLI app objects and argument helpers."""

import json
from typing import Any

import typer
from rich.console import Console

from veracode_mcp.api import VeracodeClient

app = typer.Typer(
    name="veracode-mcp",
    help="Veracode application security results as MCP tools",
    no_args_is_help=True,
)
console = Console()


def build_client() -> VeracodeClient:
    """Build an API client from the layered configuration."""
    return VeracodeClient.from_config()


def parse_tool_arguments(args_json: str | None, pairs: list[str] | None) -> dict[str, Any]:
    """Merge a JSON object and ``key=value`` pairs into one argument dict.

    Pair values are decoded as JSON when possible (``page=2`` gives an int,
    ``new_findings_only=true`` a bool) and kept as strings otherwise.
    ``key=value`` pairs override keys from the JSON object.

    Raises:
        typer.BadParameter: if the JSON is not an object or a pair has no ``=``
    """
    arguments: dict[str, Any] = {}
    if args_json:
        try:
            parsed = json.loads(args_json)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"--args is not valid JSON: {exc}") from exc
        if not isinstance(parsed, dict):
            raise typer.BadParameter("--args must be a JSON object")
        arguments.update(parsed)

    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got: {pair}")
        try:
            value: Any = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        arguments[key.strip()] = value
    return arguments
