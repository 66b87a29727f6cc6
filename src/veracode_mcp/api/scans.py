"""Scan listing endpoint."""

from typing import Any

from .responses import embedded


class ScansMixin:
    """Provide scan listings for an application or one of its sandboxes."""

    async def list_scans(
        self,
        app_guid: str,
        scan_type: str | None = None,
        sandbox_guid: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if scan_type:
            params["scan_type"] = scan_type
        if sandbox_guid:
            params["context"] = sandbox_guid
        body = await self.get_json(f"appsec/v1/applications/{app_guid}/scans", params=params or None)
        return embedded(body, "scans")
