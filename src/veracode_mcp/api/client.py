"""Async REST client for the Veracode platform."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from veracode_mcp.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_PLATFORM_URL,
    Credentials,
    get_api_base_url,
    get_credentials,
    get_platform_url,
    get_request_timeout,
)
from veracode_mcp.core.errors import UpstreamError
from veracode_mcp.utils.debug import debug_api_request

from .applications import ApplicationsMixin
from .auth import VeracodeHmacAuth
from .findings import FindingsMixin
from .policies import PoliciesMixin
from .responses import extract_error_message
from .sandboxes import SandboxesMixin
from .scans import ScansMixin

logger = logging.getLogger(__name__)

Params = dict[str, Any] | list[tuple[str, Any]] | None


class VeracodeClient(
    ApplicationsMixin, ScansMixin, SandboxesMixin, FindingsMixin, PoliciesMixin
):
    """Client for the Veracode REST API. Use as an async context manager."""

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_API_BASE_URL,
        platform_url: str = DEFAULT_PLATFORM_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.platform_url = platform_url.rstrip("/")
        self.timeout = timeout
        self.auth = VeracodeHmacAuth(credentials.api_id, credentials.api_key)
        self.transport = transport
        self.client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, project_dir: Path | None = None) -> VeracodeClient:
        """Build a client from the layered configuration."""
        return cls(
            credentials=get_credentials(project_dir),
            base_url=get_api_base_url(project_dir),
            platform_url=get_platform_url(project_dir),
            timeout=get_request_timeout(project_dir),
        )

    async def __aenter__(self):
        self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def open(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=self.auth,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                transport=self.transport,
            )

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def get_json(self, path: str, params: Params = None) -> Any:
        """GET a path relative to the API base URL and decode the JSON body.

        Raises:
            UpstreamError: on transport failure, timeout, non-2xx status or invalid JSON
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        debug_api_request("GET", path, params)
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = extract_error_message(exc.response)
            logger.debug("GET %s failed with HTTP %s: %s", path, status, message)
            raise UpstreamError(
                f"HTTP {status}: {message}", status_code=status, url=str(exc.request.url)
            ) from exc
        except httpx.HTTPError as exc:
            detail = str(exc) or type(exc).__name__
            logger.debug("GET %s failed: %s", path, detail)
            raise UpstreamError(f"Request to {path} failed: {detail}", url=path) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Invalid JSON in response from {path}",
                status_code=response.status_code,
                url=str(response.url),
            ) from exc

    def to_platform_url(self, relative: str | None) -> str | None:
        """Turn a relative platform link into an absolute analysis center URL."""
        if not relative:
            return None
        if relative.startswith(("http://", "https://")):
            return relative
        return f"{self.platform_url}/auth/index.jsp#{relative}"
