"""Walk findings pages into one bounded result set."""

from __future__ import annotations

import logging

from .fetcher import PageFetcher, clamp_page_size
from .models import AggregateResult, FilterSet, Finding

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 50


class FindingsAggregator:
    """Fetch pages sequentially until exhaustion, a short page or the page ceiling.

    ``truncated`` is set only when the ceiling stopped the walk while the
    backend still reported more pages. Any page failure aborts the whole call;
    partial results are never returned. Items are neither re-sorted nor
    de-duplicated.
    """

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def fetch_all(
        self,
        app_guid: str,
        filters: FilterSet,
        max_pages: int | None = None,
        page_size: int | None = None,
    ) -> AggregateResult:
        page_size = clamp_page_size(page_size)
        max_pages = max(1, int(max_pages)) if max_pages is not None else DEFAULT_MAX_PAGES

        possible, available = await self.fetcher.check_scan_availability(app_guid, filters)
        if not possible:
            return AggregateResult(
                items=[],
                pages_retrieved=0,
                total_pages=0,
                total_elements=0,
                truncated=False,
                page_size=page_size,
                max_pages=max_pages,
                scan_type_unavailable=True,
                available_scan_types=available,
            )

        items: list[Finding] = []
        pages_retrieved = 0
        total_pages = 1
        total_elements = 0
        cursor = 0
        short_page = False

        while cursor < total_pages and pages_retrieved < max_pages:
            page = await self.fetcher.fetch_page(
                app_guid, filters, page=cursor, size=page_size, precheck=False
            )
            items.extend(page.items)
            total_pages = page.total_pages
            total_elements = page.total_elements
            pages_retrieved += 1
            cursor += 1
            if len(page.items) < page_size:
                short_page = True
                break

        truncated = not short_page and pages_retrieved >= max_pages and cursor < total_pages
        logger.info(
            "Retrieved %d findings in %d page(s) for %s (truncated=%s)",
            len(items),
            pages_retrieved,
            app_guid,
            truncated,
        )
        return AggregateResult(
            items=items,
            pages_retrieved=pages_retrieved,
            total_pages=total_pages,
            total_elements=total_elements,
            truncated=truncated,
            page_size=page_size,
            max_pages=max_pages,
            available_scan_types=available,
        )
