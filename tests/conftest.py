"""Test configuration and fixtures for veracode-mcp."""

import math
import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from veracode_mcp.config import Credentials
from veracode_mcp.core.errors import NotFoundError, UpstreamError
from veracode_mcp.tools import ToolContext

API_ID = "11111111111111111111111111111111"
API_KEY = "0123456789abcdef0123456789abcdef"
METAMAIL_GUID = "6d4b4a1c-2e0b-4f3a-9c55-0f3e5b7d9a10"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(temp_dir: Path, monkeypatch) -> Path:
    """Keep tests away from the real environment, home directory and cwd .env."""
    for key in list(os.environ):
        if key.startswith("VERACODE_") or key == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(Path, "home", lambda: temp_dir)
    monkeypatch.chdir(temp_dir)
    return temp_dir


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_id=API_ID, api_key=API_KEY)


def make_app(name: str, guid: str, criticality: str = "HIGH", **profile: Any) -> dict[str, Any]:
    """Build an application profile document."""
    return {
        "guid": guid,
        "id": abs(hash(guid)) % 100000,
        "profile": {"name": name, "business_criticality": criticality, **profile},
        "app_profile_url": f"HomeAppProfile:{guid}",
        "results_url": f"ViewReportsResultSummary:{guid}",
    }


def make_scan(
    scan_type: str, created: str = "2026-10-01T12:00:00Z", **extra: Any
) -> dict[str, Any]:
    return {"scan_type": scan_type, "status": "PUBLISHED", "created_date": created, **extra}


def make_static(issue_id: int, severity: int = 3, cwe: int = 79, **extra: Any) -> dict[str, Any]:
    """Build a STATIC finding as the findings endpoint returns it."""
    return {
        "issue_id": issue_id,
        "scan_type": "STATIC",
        "description": f"Flaw {issue_id}",
        "violates_policy": extra.pop("violates_policy", False),
        "finding_status": {"status": extra.pop("status", "OPEN"), "new": False},
        "finding_details": {
            "severity": severity,
            "cwe": {"id": cwe, "name": f"CWE-{cwe}"},
            "file_path": "src/app.py",
            "file_line_number": issue_id,
            **extra,
        },
    }


def make_sca(
    issue_id: int,
    severity: int = 3,
    cvss: float | None = 5.0,
    exploit: bool = False,
    component: str = "comp",
    licenses: list[dict[str, Any]] | None = None,
    metadata: str = "DIRECT",
    violates_policy: bool = False,
) -> dict[str, Any]:
    """Build an SCA finding as the findings endpoint returns it."""
    cve = None
    if cvss is not None or exploit:
        cve = {
            "name": f"CVE-2026-{issue_id:04d}",
            "cvss": cvss,
            "severity": "High",
            "exploitability": {"exploit_observed": exploit},
        }
    return {
        "issue_id": issue_id,
        "scan_type": "SCA",
        "violates_policy": violates_policy,
        "finding_status": {"status": "OPEN"},
        "finding_details": {
            "severity": severity,
            "component_id": component,
            "component_filename": f"{component}.jar",
            "version": "1.0.0",
            "metadata": metadata,
            "licenses": licenses or [],
            "cve": cve,
        },
    }


class FakeClient:
    """In-memory backend double that records every call it receives."""

    def __init__(
        self,
        applications: list[dict[str, Any]] | None = None,
        scans: dict[str, list[dict[str, Any]]] | None = None,
        findings: list[dict[str, Any]] | None = None,
        sandboxes: dict[str, list[dict[str, Any]]] | None = None,
        reported_total_pages: int | None = None,
        fail_on_page: int | None = None,
    ):
        self.applications = applications or []
        self.scans = scans or {}
        self.findings = findings or []
        self.sandboxes = sandboxes or {}
        self.reported_total_pages = reported_total_pages
        self.fail_on_page = fail_on_page
        self.calls: list[tuple[str, Any]] = []

    async def __aenter__(self):
        self.calls.append(("open", None))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.calls.append(("close", None))

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    async def get_application(self, guid: str) -> dict[str, Any]:
        self.calls.append(("get_application", guid))
        for app in self.applications:
            if app["guid"] == guid:
                return app
        raise NotFoundError(f"No application found with ID: {guid}")

    async def list_applications(
        self, name: str | None = None, page: int | None = None, size: int | None = None
    ) -> list[dict[str, Any]]:
        self.calls.append(("list_applications", name))
        if not name:
            return list(self.applications)
        return [a for a in self.applications if name.lower() in a["profile"]["name"].lower()]

    async def search_applications(self, name: str) -> list[dict[str, Any]]:
        self.calls.append(("search_applications", name))
        return [a for a in self.applications if name.lower() in a["profile"]["name"].lower()]

    async def list_scans(
        self, app_guid: str, scan_type: str | None = None, sandbox_guid: str | None = None
    ) -> list[dict[str, Any]]:
        self.calls.append(("list_scans", (app_guid, scan_type, sandbox_guid)))
        scans = self.scans.get(sandbox_guid or app_guid, [])
        if scan_type:
            scans = [s for s in scans if s["scan_type"] == scan_type]
        return scans

    async def list_sandboxes(
        self, app_guid: str, page: int | None = None, size: int | None = None
    ) -> list[dict[str, Any]]:
        self.calls.append(("list_sandboxes", app_guid))
        return self.sandboxes.get(app_guid, [])

    async def get_findings_page(
        self, app_guid: str, params: list[tuple[str, str]]
    ) -> dict[str, Any]:
        query = dict(params)
        page, size = int(query["page"]), int(query["size"])
        self.calls.append(("get_findings_page", (app_guid, page, size)))
        if self.fail_on_page == page:
            raise UpstreamError("HTTP 500: Internal Server Error", status_code=500)
        items = self.findings[page * size : (page + 1) * size]
        total = len(self.findings)
        total_pages = self.reported_total_pages
        if total_pages is None:
            total_pages = math.ceil(total / size) if size else 0
        return {
            "_embedded": {"findings": items},
            "page": {
                "number": page,
                "size": size,
                "total_elements": total,
                "total_pages": total_pages,
            },
        }

    async def get_static_flaw_info(
        self, app_guid: str, issue_id: str, sandbox_guid: str | None = None
    ) -> dict[str, Any]:
        self.calls.append(("get_static_flaw_info", issue_id))
        return {"issue_summary": {"issue_id": int(issue_id)}, "data_paths": []}

    def to_platform_url(self, relative: str | None) -> str | None:
        if not relative:
            return None
        return f"https://analysiscenter.veracode.com/auth/index.jsp#{relative}"


@pytest.fixture
def metamail_client() -> FakeClient:
    """Application "Metamail" with 102 STATIC findings and no other scan types."""
    return FakeClient(
        applications=[make_app("Metamail", METAMAIL_GUID)],
        scans={METAMAIL_GUID: [make_scan("STATIC")]},
        findings=[make_static(i, severity=(i % 6)) for i in range(1, 103)],
    )


@pytest.fixture
def metamail_ctx(metamail_client: FakeClient) -> ToolContext:
    return ToolContext.from_client(metamail_client)
