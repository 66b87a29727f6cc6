"""HMAC request signing for the Veracode REST API."""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from collections.abc import Callable, Generator

import httpx

from veracode_mcp.core.errors import ConfigurationError

AUTH_SCHEME = "VERACODE-HMAC-SHA-256"
REQUEST_VERSION = b"vcode_request_version_1"


def _hmac256(key: bytes, message: bytes) -> bytes:
    return hmac.new(key, message, hashlib.sha256).digest()


def _default_nonce() -> str:
    return secrets.token_hex(16)


def _default_timestamp() -> str:
    return str(int(time.time() * 1000))


class VeracodeHmacAuth(httpx.Auth):
    """Sign every outgoing request with the Veracode HMAC scheme.

    The key is hex-decoded once. ``nonce_factory`` and ``timestamp_factory``
    exist so tests can produce a deterministic header.
    """

    def __init__(
        self,
        api_id: str,
        api_key: str,
        nonce_factory: Callable[[], str] = _default_nonce,
        timestamp_factory: Callable[[], str] = _default_timestamp,
    ):
        try:
            self._key_bytes = bytes.fromhex(api_key)
        except ValueError as exc:
            raise ConfigurationError("VERACODE_API_KEY must be a hex string") from exc
        self.api_id = api_id
        self.nonce_factory = nonce_factory
        self.timestamp_factory = timestamp_factory

    def signature(self, host: str, url: str, method: str, nonce: str, timestamp: str) -> str:
        """Return the hex signature for one request."""
        data = f"id={self.api_id}&host={host}&url={url}&method={method.upper()}"
        hashed_nonce = _hmac256(self._key_bytes, bytes.fromhex(nonce))
        hashed_timestamp = _hmac256(hashed_nonce, timestamp.encode())
        hashed_version = _hmac256(hashed_timestamp, REQUEST_VERSION)
        return hmac.new(hashed_version, data.encode(), hashlib.sha256).hexdigest()

    def build_header(self, host: str, url: str, method: str) -> str:
        nonce = self.nonce_factory()
        timestamp = self.timestamp_factory()
        sig = self.signature(host, url, method, nonce, timestamp)
        return f"{AUTH_SCHEME} id={self.api_id},ts={timestamp},nonce={nonce},sig={sig}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        url = request.url.raw_path.decode("ascii")
        request.headers["Authorization"] = self.build_header(request.url.host, url, request.method)
        yield request
