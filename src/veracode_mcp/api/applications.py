"""Application profile endpoints."""

from typing import Any

from veracode_mcp.core.errors import NotFoundError, UpstreamError

from .responses import embedded


class ApplicationsMixin:
    """Provide application profile lookups."""

    async def list_applications(
        self, name: str | None = None, page: int | None = None, size: int | None = None
    ) -> list[dict[str, Any]]:
        """List application profiles, optionally filtered by (partial) name."""
        params: dict[str, Any] = {}
        if name:
            params["name"] = name
        if page is not None:
            params["page"] = page
        if size is not None:
            params["size"] = size
        body = await self.get_json("appsec/v1/applications", params=params or None)
        return embedded(body, "applications")

    async def search_applications(self, name: str) -> list[dict[str, Any]]:
        """Search application profiles by name, in backend order."""
        return await self.list_applications(name=name)

    async def get_application(self, guid: str) -> dict[str, Any]:
        """Fetch one application profile.

        Raises:
            NotFoundError: if the backend has no application with this GUID
        """
        try:
            return await self.get_json(f"appsec/v1/applications/{guid}")
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise NotFoundError(f"No application found with ID: {guid}") from exc
            raise
