"""Logging configuration shared by the CLI and the MCP server."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "veracode_mcp"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send package logs to stderr through rich. Safe to call more than once."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
