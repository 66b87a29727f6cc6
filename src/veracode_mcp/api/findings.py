"""Findings endpoints."""

from typing import Any

from veracode_mcp.core.errors import UpstreamError


class FindingsMixin:
    """Provide raw findings pages and static flaw data paths."""

    async def get_findings_page(
        self, app_guid: str, params: list[tuple[str, str]]
    ) -> dict[str, Any]:
        """Fetch one raw findings page (``_embedded.findings`` plus ``page``)."""
        body = await self.get_json(f"appsec/v2/applications/{app_guid}/findings", params=params)
        return body if isinstance(body, dict) else {}

    async def get_static_flaw_info(
        self, app_guid: str, issue_id: str, sandbox_guid: str | None = None
    ) -> dict[str, Any]:
        """Fetch data path and call stack information for one static flaw."""
        params = {"context": sandbox_guid} if sandbox_guid else None
        try:
            return await self.get_json(
                f"appsec/v2/applications/{app_guid}/findings/{issue_id}/static_flaw_info",
                params=params,
            )
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise UpstreamError(
                    f"Static flaw info not available for issue ID {issue_id}. "
                    "The finding may not be a static analysis flaw with data path information, "
                    "or the issue ID does not exist in this application",
                    status_code=404,
                    url=exc.url,
                ) from exc
            raise
