"""Tests for single-page findings retrieval."""

import pytest

from conftest import METAMAIL_GUID, FakeClient, make_scan, make_static
from veracode_mcp.core import FilterSet, PageFetcher, ScanType, UpstreamError
from veracode_mcp.core.fetcher import clamp_page_index, clamp_page_size


class TestClamping:
    """Tests for page size and index clamping."""

    @pytest.mark.parametrize(
        ("requested", "expected"), [(None, 500), (0, 1), (-5, 1), (3, 3), (500, 500), (9999, 500)]
    )
    def test_page_size(self, requested, expected):
        assert clamp_page_size(requested) == expected

    def test_page_index(self):
        assert clamp_page_index(None) == 0
        assert clamp_page_index(-2) == 0
        assert clamp_page_index(4) == 4


class TestPageFetcher:
    """Tests for PageFetcher.fetch_page."""

    async def test_metamail_first_page_of_34(self, metamail_client: FakeClient):
        page = await PageFetcher(metamail_client).fetch_page(
            METAMAIL_GUID, FilterSet(scan_type=ScanType.STATIC), page=0, size=3
        )
        assert len(page.items) == 3
        assert page.total_pages == 34
        assert page.total_elements == 102
        assert page.has_previous is False
        assert page.has_next is True
        assert [f.issue_id for f in page.items] == [1, 2, 3]

    async def test_scan_type_mismatch_skips_findings_call(self, metamail_client: FakeClient):
        page = await PageFetcher(metamail_client).fetch_page(
            METAMAIL_GUID, FilterSet(scan_type=ScanType.SCA)
        )
        assert page.items == []
        assert page.total_elements == 0
        assert page.scan_type_unavailable is True
        assert page.available_scan_types == ["STATIC"]
        assert metamail_client.count("get_findings_page") == 0

    async def test_scan_type_mismatch_on_later_page_resets_to_first(
        self, metamail_client: FakeClient
    ):
        page = await PageFetcher(metamail_client).fetch_page(
            METAMAIL_GUID, FilterSet(scan_type=ScanType.SCA), page=3, size=10
        )
        assert page.page_index == 0
        assert page.total_pages == 0
        assert page.has_previous is False
        assert page.has_next is False

    async def test_no_scans_at_all(self):
        client = FakeClient(findings=[make_static(1)])
        page = await PageFetcher(client).fetch_page(METAMAIL_GUID, FilterSet())
        assert page.scan_type_unavailable is True
        assert page.available_scan_types == []
        assert client.count("get_findings_page") == 0

    async def test_precheck_uses_sandbox_context(self):
        client = FakeClient(scans={"sbx-guid": [make_scan("STATIC")]}, findings=[make_static(1)])
        page = await PageFetcher(client).fetch_page(METAMAIL_GUID, FilterSet(context="sbx-guid"))
        assert len(page.items) == 1
        assert ("list_scans", (METAMAIL_GUID, None, "sbx-guid")) in client.calls

    async def test_precheck_can_be_skipped(self):
        client = FakeClient(findings=[make_static(1)])
        page = await PageFetcher(client).fetch_page(METAMAIL_GUID, FilterSet(), precheck=False)
        assert len(page.items) == 1
        assert client.count("list_scans") == 0

    async def test_page_size_clamped_before_request(self, metamail_client: FakeClient):
        page = await PageFetcher(metamail_client).fetch_page(METAMAIL_GUID, FilterSet(), size=5000)
        assert page.page_size == 500
        assert ("get_findings_page", (METAMAIL_GUID, 0, 500)) in metamail_client.calls

    async def test_upstream_error_propagates(self, metamail_client: FakeClient):
        metamail_client.fail_on_page = 0
        with pytest.raises(UpstreamError):
            await PageFetcher(metamail_client).fetch_page(METAMAIL_GUID, FilterSet())

    async def test_missing_page_block(self):
        class Bare(FakeClient):
            async def get_findings_page(self, app_guid, params):
                return {"_embedded": {"findings": [make_static(1), make_static(2)]}}

        page = await PageFetcher(Bare()).fetch_page(METAMAIL_GUID, FilterSet(), precheck=False)
        assert page.total_elements == 2
        assert page.total_pages == 1

    async def test_null_page_number_falls_back_to_requested_index(self):
        class NullNumber(FakeClient):
            async def get_findings_page(self, app_guid, params):
                return {
                    "_embedded": {"findings": [make_static(1)]},
                    "page": {"number": None, "total_elements": 21, "total_pages": 3},
                }

        page = await PageFetcher(NullNumber()).fetch_page(
            METAMAIL_GUID, FilterSet(), page=2, size=10, precheck=False
        )
        assert page.page_index == 2
        assert page.total_pages == 3
