"""Tests for the REST client and its endpoint mixins."""

import httpx
import pytest
import respx
from httpx import Response

from veracode_mcp.api import VeracodeClient, embedded, extract_error_message
from veracode_mcp.config import Credentials
from veracode_mcp.core.errors import NotFoundError, UpstreamError

BASE = "https://api.veracode.com"
APP_GUID = "6d4b4a1c-2e0b-4f3a-9c55-0f3e5b7d9a10"


def _client() -> VeracodeClient:
    return VeracodeClient(
        Credentials(api_id="id", api_key="00112233445566778899aabbccddeeff"),
        base_url=f"{BASE}/",
        platform_url="https://analysiscenter.veracode.com/",
    )


class TestResponseHelpers:
    """Tests for extract_error_message and embedded."""

    def test_prefers_message(self):
        response = Response(400, json={"message": "Bad filter", "error": "ignored"})
        assert extract_error_message(response) == "Bad filter"

    def test_falls_back_to_error(self):
        response = Response(401, json={"error": "Unauthorized"})
        assert extract_error_message(response) == "Unauthorized"

    def test_falls_back_to_json_body(self):
        assert extract_error_message(Response(500, json={"code": 7})) == '{"code": 7}'

    def test_falls_back_to_text(self):
        assert extract_error_message(Response(502, text="Bad Gateway upstream")) == (
            "Bad Gateway upstream"
        )

    def test_falls_back_to_reason(self):
        assert extract_error_message(Response(503)) == "Service Unavailable"

    def test_embedded(self):
        assert embedded({"_embedded": {"scans": [{"a": 1}]}}, "scans") == [{"a": 1}]
        assert embedded({}, "scans") == []
        assert embedded(None, "scans") == []


class TestVeracodeClient:
    """Tests for VeracodeClient."""

    async def test_requires_open(self):
        with pytest.raises(RuntimeError):
            await _client().get_json("appsec/v1/applications")

    @respx.mock
    async def test_signs_requests(self):
        route = respx.get(f"{BASE}/appsec/v1/applications").mock(
            return_value=Response(200, json={"_embedded": {"applications": []}})
        )
        async with _client() as client:
            assert await client.list_applications(name="Metamail") == []
        request = route.calls.last.request
        assert request.headers["Authorization"].startswith("VERACODE-HMAC-SHA-256 id=id,")
        assert request.url.params["name"] == "Metamail"

    @respx.mock
    async def test_http_error_carries_backend_message(self):
        respx.get(f"{BASE}/appsec/v1/applications").mock(
            return_value=Response(403, json={"message": "Access denied for this API id"})
        )
        async with _client() as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.list_applications()
        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "HTTP 403: Access denied for this API id"

    @respx.mock
    async def test_timeout_has_no_status(self):
        respx.get(f"{BASE}/appsec/v1/applications/{APP_GUID}/scans").mock(
            side_effect=httpx.ConnectTimeout("timed out")
        )
        async with _client() as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.list_scans(APP_GUID)
        assert exc_info.value.status_code is None
        assert "timed out" in str(exc_info.value)

    @respx.mock
    async def test_invalid_json(self):
        respx.get(f"{BASE}/appsec/v1/policy_settings").mock(
            return_value=Response(200, text="<html>")
        )
        async with _client() as client:
            with pytest.raises(UpstreamError, match="Invalid JSON"):
                await client.get_policy_settings()

    @respx.mock
    async def test_get_application_404_is_not_found(self):
        respx.get(f"{BASE}/appsec/v1/applications/{APP_GUID}").mock(
            return_value=Response(404, json={"message": "Not found"})
        )
        async with _client() as client:
            with pytest.raises(NotFoundError, match=f"No application found with ID: {APP_GUID}"):
                await client.get_application(APP_GUID)

    @respx.mock
    async def test_list_scans_sends_type_and_context(self):
        route = respx.get(f"{BASE}/appsec/v1/applications/{APP_GUID}/scans").mock(
            return_value=Response(200, json={"_embedded": {"scans": [{"scan_type": "SCA"}]}})
        )
        async with _client() as client:
            scans = await client.list_scans(APP_GUID, scan_type="SCA", sandbox_guid="sbx-1")
        assert scans == [{"scan_type": "SCA"}]
        params = route.calls.last.request.url.params
        assert params["scan_type"] == "SCA"
        assert params["context"] == "sbx-1"

    @respx.mock
    async def test_findings_page_repeats_cwe(self):
        route = respx.get(f"{BASE}/appsec/v2/applications/{APP_GUID}/findings").mock(
            return_value=Response(200, json={"_embedded": {"findings": []}, "page": {}})
        )
        async with _client() as client:
            await client.get_findings_page(
                APP_GUID, [("cwe", "79"), ("cwe", "89"), ("page", "0"), ("size", "500")]
            )
        params = route.calls.last.request.url.params
        assert params.get_list("cwe") == ["79", "89"]
        assert params["size"] == "500"

    @respx.mock
    async def test_static_flaw_info_404_explains(self):
        respx.get(
            f"{BASE}/appsec/v2/applications/{APP_GUID}/findings/42/static_flaw_info"
        ).mock(return_value=Response(404))
        async with _client() as client:
            with pytest.raises(UpstreamError, match="not available for issue ID 42"):
                await client.get_static_flaw_info(APP_GUID, "42")

    @respx.mock
    async def test_policy_params_skip_unset(self):
        route = respx.get(f"{BASE}/appsec/v1/policies").mock(
            return_value=Response(200, json={"_embedded": {"policy_versions": []}})
        )
        async with _client() as client:
            await client.list_policies(category="APPLICATION", page=1)
        params = route.calls.last.request.url.params
        assert params["category"] == "APPLICATION"
        assert params["page"] == "1"
        assert "name" not in params

    def test_to_platform_url(self):
        client = _client()
        assert client.to_platform_url("HomeAppProfile:1:2") == (
            "https://analysiscenter.veracode.com/auth/index.jsp#HomeAppProfile:1:2"
        )
        assert client.to_platform_url("https://x.example/y") == "https://x.example/y"
        assert client.to_platform_url(None) is None

    def test_from_config(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VERACODE_API_ID", "id")
        monkeypatch.setenv("VERACODE_API_KEY", "00ff")
        monkeypatch.setenv("VERACODE_API_BASE_URL", "https://api.veracode.eu")
        client = VeracodeClient.from_config()
        assert client.base_url == "https://api.veracode.eu/"
        assert client.platform_url == "https://analysiscenter.veracode.eu"
