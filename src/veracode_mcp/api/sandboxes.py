"""Sandbox listing endpoint."""

from typing import Any

from .responses import embedded


class SandboxesMixin:
    """Provide development sandbox listings."""

    async def list_sandboxes(
        self, app_guid: str, page: int | None = None, size: int | None = None
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if size is not None:
            params["size"] = size
        body = await self.get_json(
            f"appsec/v1/applications/{app_guid}/sandboxes", params=params or None
        )
        return embedded(body, "sandboxes")
