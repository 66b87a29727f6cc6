"""Tool façade: definitions, executors and the dispatcher."""

from .context import ToolContext
from .definitions import get_all_tools, get_tool
from .envelope import err, ok
from .executors import TOOL_EXECUTORS, dispatch_tool

__all__ = [
    "TOOL_EXECUTORS",
    "ToolContext",
    "dispatch_tool",
    "err",
    "get_all_tools",
    "get_tool",
    "ok",
]
