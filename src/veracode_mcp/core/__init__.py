"""Findings retrieval engine: models, resolution, paging and analytics."""

from .aggregator import DEFAULT_MAX_PAGES, FindingsAggregator
from .errors import (
    ConfigurationError,
    NotFoundError,
    UpstreamError,
    VeracodeError,
)
from .fetcher import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageFetcher
from .models import AggregateResult, FilterSet, Finding, Page, ScanType
from .resolver import ApplicationResolver, Resolution, is_guid

__all__ = [
    "DEFAULT_MAX_PAGES",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "AggregateResult",
    "ApplicationResolver",
    "ConfigurationError",
    "FilterSet",
    "Finding",
    "FindingsAggregator",
    "NotFoundError",
    "Page",
    "PageFetcher",
    "Resolution",
    "ScanType",
    "UpstreamError",
    "VeracodeError",
    "is_guid",
]
