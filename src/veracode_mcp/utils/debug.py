"""Debug utilities for API and tool visibility.

Thread-safe debug output with rich formatting. Everything goes to stderr so
the MCP stdio stream and the CLI's JSON output stay clean.
"""

import json
import threading
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

# Thread-local storage for debug state
_debug_state = threading.local()


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread/session."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread/session."""
    return getattr(_debug_state, "enabled", False)


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (api, tool, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = Console(stderr=True)
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan")
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2)
                syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
                console.print(f"  {key}:", style="dim")
                console.print(syntax)
            except (TypeError, ValueError):
                console.print(f"  {key}: {value}", style="dim")
        elif isinstance(value, list):
            console.print(f"  {key}: {', '.join(str(v) for v in value)}", style="dim")
        elif isinstance(value, str) and len(value) > 100:
            console.print(f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim")
        else:
            console.print(f"  {key}: {value}", style="dim")


def debug_api_request(method: str, path: str, params: Any = None) -> None:
    """Log an outgoing API request in debug mode."""
    if not is_debug_enabled():
        return
    if isinstance(params, list):
        query = "&".join(f"{k}={v}" for k, v in params)
    elif isinstance(params, dict):
        query = "&".join(f"{k}={v}" for k, v in params.items())
    else:
        query = ""
    debug_print("api", f"→ {method} {path}", Query=query or None)


def debug_tool_execution(
    tool_name: str,
    params: dict[str, Any],
    start: bool = True,
    elapsed: float | None = None,
    success: bool | None = None,
) -> None:
    """Log tool execution in debug mode.

    Args:
        tool_name: Name of the tool being executed
        params: Tool parameters
        start: True for start event, False for completion
        elapsed: Time elapsed in seconds (for completion event)
        success: Envelope success flag (for completion event)
    """
    if not is_debug_enabled():
        return
    if start:
        simple_params = {}
        for key, value in params.items():
            if isinstance(value, str) and len(value) > 50:
                simple_params[key] = f"{value[:50]}..."
            else:
                simple_params[key] = value
        debug_print("tool", f"dispatch_tool({tool_name}) +0.0s", Params=simple_params)
    else:
        debug_print(
            "tool",
            f"dispatch_tool({tool_name}) completed +{elapsed:.1f}s"
            if elapsed
            else f"dispatch_tool({tool_name}) completed",
            Success=success,
        )
