"""Helpers for reading Veracode REST responses."""

import json
from typing import Any

import httpx


def extract_error_message(response: httpx.Response) -> str:
    """Best message from an error response: message, then error, then the body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if body.get("message"):
            return str(body["message"])
        if body.get("error"):
            return str(body["error"])
        return json.dumps(body)
    if body is not None:
        return json.dumps(body)
    return response.text or response.reason_phrase


def embedded(body: Any, key: str) -> list[dict[str, Any]]:
    """Return ``body["_embedded"][key]`` or an empty list."""
    if not isinstance(body, dict):
        return []
    items = (body.get("_embedded") or {}).get(key)
    return items if isinstance(items, list) else []
