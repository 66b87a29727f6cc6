"""Fetch a single page of findings."""

from __future__ import annotations

import logging
from typing import Any

from .models import FilterSet, Finding, Page

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500
MAX_PAGE_SIZE = 500


def clamp_page_size(size: int | None, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Clamp a requested page size into [1, MAX_PAGE_SIZE]."""
    if size is None:
        return default
    return max(1, min(int(size), MAX_PAGE_SIZE))


def clamp_page_index(page: int | None) -> int:
    return max(0, int(page or 0))


class PageFetcher:
    """Issue one findings request for an application and parse the page.

    Before the request, the application's scans are listed: when there are
    none, or none of the requested scan type, an empty page is returned
    without calling the findings endpoint.
    """

    def __init__(self, client: Any):
        self.client = client

    async def check_scan_availability(
        self, app_guid: str, filters: FilterSet
    ) -> tuple[bool, list[str]]:
        """Return (findings_possible, available_scan_types) for app_guid."""
        scans = await self.client.list_scans(app_guid, sandbox_guid=filters.context)
        available = sorted({str(s.get("scan_type")) for s in scans if s.get("scan_type")})
        if not scans:
            logger.info("Application %s has no scans", app_guid)
            return False, available
        if filters.scan_type and filters.scan_type.value not in available:
            logger.info(
                "Application %s has no %s scans (available: %s)",
                app_guid,
                filters.scan_type.value,
                ", ".join(available),
            )
            return False, available
        return True, available

    async def fetch_page(
        self,
        app_guid: str,
        filters: FilterSet,
        page: int | None = 0,
        size: int | None = DEFAULT_PAGE_SIZE,
        precheck: bool = True,
    ) -> Page:
        """Fetch one page of findings.

        Raises:
            UpstreamError: on any backend failure (not retried)
        """
        page_index = clamp_page_index(page)
        page_size = clamp_page_size(size)

        if precheck:
            possible, available = await self.check_scan_availability(app_guid, filters)
            if not possible:
                return Page.empty(page_size, available)

        params = filters.to_params() + [("page", str(page_index)), ("size", str(page_size))]
        body = await self.client.get_findings_page(app_guid, params)
        raw_items = (body.get("_embedded") or {}).get("findings") or []
        items = [Finding.from_api(raw) for raw in raw_items]

        page_meta = body.get("page") or {}
        total_elements = page_meta.get("total_elements")
        total_pages = page_meta.get("total_pages")
        number = page_meta.get("number")
        result = Page(
            items=items,
            page_index=int(number) if number is not None else page_index,
            page_size=page_size,
            total_pages=int(total_pages) if total_pages is not None else (1 if items else 0),
            total_elements=int(total_elements) if total_elements is not None else len(items),
        )
        logger.debug(
            "Fetched findings page %d (size %d) for %s: %d items, %d total pages",
            result.page_index,
            page_size,
            app_guid,
            len(items),
            result.total_pages,
        )
        return result
