"""Collaborators shared by all tool executors for one process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from veracode_mcp.core.aggregator import FindingsAggregator
from veracode_mcp.core.fetcher import PageFetcher
from veracode_mcp.core.resolver import ApplicationResolver


@dataclass
class ToolContext:
    """Single client plus the engine objects built on top of it."""

    client: Any
    resolver: ApplicationResolver
    fetcher: PageFetcher
    aggregator: FindingsAggregator

    @classmethod
    def from_client(cls, client: Any) -> ToolContext:
        fetcher = PageFetcher(client)
        return cls(
            client=client,
            resolver=ApplicationResolver(client),
            fetcher=fetcher,
            aggregator=FindingsAggregator(fetcher),
        )
