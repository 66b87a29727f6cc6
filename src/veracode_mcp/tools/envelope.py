"""Uniform success/failure envelopes returned by every tool."""

from typing import Any


def ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def err(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}
