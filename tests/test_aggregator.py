"""Tests for all-pages findings aggregation."""

import math

import pytest

from conftest import METAMAIL_GUID, FakeClient, make_scan, make_static
from veracode_mcp.core import FilterSet, FindingsAggregator, PageFetcher, ScanType, UpstreamError


def _aggregator(client: FakeClient) -> FindingsAggregator:
    return FindingsAggregator(PageFetcher(client))


def _client(count: int, **kwargs) -> FakeClient:
    return FakeClient(
        scans={METAMAIL_GUID: [make_scan("STATIC")]},
        findings=[make_static(i) for i in range(count)],
        **kwargs,
    )


class TestFindingsAggregator:
    """Tests for FindingsAggregator.fetch_all."""

    @pytest.mark.parametrize(("count", "size"), [(0, 10), (7, 10), (30, 10), (31, 10), (1, 1)])
    async def test_completeness(self, count, size):
        client = _client(count)
        result = await _aggregator(client).fetch_all(
            METAMAIL_GUID, FilterSet(), max_pages=50, page_size=size
        )
        assert len(result.items) == count
        assert result.pages_retrieved == max(1, math.ceil(count / size))
        assert result.truncated is False

    async def test_truncation(self):
        client = _client(50)
        result = await _aggregator(client).fetch_all(
            METAMAIL_GUID, FilterSet(), max_pages=3, page_size=10
        )
        assert result.truncated is True
        assert len(result.items) == 30
        assert result.pages_retrieved == 3
        assert result.total_pages == 5
        assert result.total_elements == 50

    async def test_ceiling_reached_exactly_is_not_truncated(self):
        client = _client(30)
        result = await _aggregator(client).fetch_all(
            METAMAIL_GUID, FilterSet(), max_pages=3, page_size=10
        )
        assert result.truncated is False
        assert len(result.items) == 30

    async def test_short_page_stops_walk(self):
        client = _client(25, reported_total_pages=9)
        result = await _aggregator(client).fetch_all(
            METAMAIL_GUID, FilterSet(), max_pages=50, page_size=10
        )
        assert len(result.items) == 25
        assert result.pages_retrieved == 3
        assert result.truncated is False
        assert client.count("get_findings_page") == 3

    async def test_short_page_at_the_ceiling_is_not_truncated(self):
        client = _client(25, reported_total_pages=9)
        result = await _aggregator(client).fetch_all(
            METAMAIL_GUID, FilterSet(), max_pages=3, page_size=10
        )
        assert len(result.items) == 25
        assert result.pages_retrieved == 3
        assert result.total_pages == 9
        assert result.truncated is False

    async def test_order_preserved(self):
        client = _client(23)
        result = await _aggregator(client).fetch_all(METAMAIL_GUID, FilterSet(), page_size=5)
        assert [f.issue_id for f in result.items] == list(range(23))
        pages = [args[1] for call, args in client.calls if call == "get_findings_page"]
        assert pages == [0, 1, 2, 3, 4]

    async def test_duplicates_are_kept(self):
        client = FakeClient(
            scans={METAMAIL_GUID: [make_scan("STATIC")]},
            findings=[make_static(1), make_static(1), make_static(2)],
        )
        result = await _aggregator(client).fetch_all(METAMAIL_GUID, FilterSet(), page_size=2)
        assert [f.issue_id for f in result.items] == [1, 1, 2]

    async def test_metamail_in_one_page(self, metamail_client: FakeClient):
        result = await _aggregator(metamail_client).fetch_all(
            METAMAIL_GUID, FilterSet(scan_type=ScanType.STATIC)
        )
        assert len(result.items) == 102
        assert result.pages_retrieved == 1
        assert result.truncated is False
        assert metamail_client.count("get_findings_page") == 1

    async def test_precheck_runs_once(self):
        client = _client(40)
        await _aggregator(client).fetch_all(METAMAIL_GUID, FilterSet(), page_size=10)
        assert client.count("list_scans") == 1
        assert client.count("get_findings_page") == 4

    async def test_scan_type_mismatch_short_circuits(self, metamail_client: FakeClient):
        result = await _aggregator(metamail_client).fetch_all(
            METAMAIL_GUID, FilterSet(scan_type=ScanType.SCA)
        )
        assert result.items == []
        assert result.total_elements == 0
        assert result.pages_retrieved == 0
        assert result.truncated is False
        assert result.scan_type_unavailable is True
        assert metamail_client.count("get_findings_page") == 0

    async def test_mid_walk_failure_fails_whole_call(self):
        client = _client(40, fail_on_page=2)
        with pytest.raises(UpstreamError):
            await _aggregator(client).fetch_all(METAMAIL_GUID, FilterSet(), page_size=10)
        assert client.count("get_findings_page") == 3

    async def test_defaults(self):
        client = _client(3)
        result = await _aggregator(client).fetch_all(METAMAIL_GUID, FilterSet())
        assert result.page_size == 500
        assert result.max_pages == 50
