"""Veracode REST API client."""

from .auth import VeracodeHmacAuth
from .client import VeracodeClient
from .responses import embedded, extract_error_message

__all__ = [
    "VeracodeClient",
    "VeracodeHmacAuth",
    "embedded",
    "extract_error_message",
]
