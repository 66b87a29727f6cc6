"""Exception types raised by the client, the findings engine and the tools."""

from __future__ import annotations


class VeracodeError(Exception):
    """Base class for all errors raised on purpose by this package."""


class ConfigurationError(VeracodeError):
    """Credentials or settings are missing or invalid."""


class NotFoundError(VeracodeError):
    """An application (or other entity) could not be resolved."""


class UpstreamError(VeracodeError):
    """Transport, authentication or backend failure.

    ``status_code`` is None when no HTTP response was received (timeouts,
    connection errors).
    """

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
