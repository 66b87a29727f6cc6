"""Argument parsing and document shaping shared by the executors."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from veracode_mcp.core.resolver import Resolution

from ..context import ToolContext


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def require_str(params: dict[str, Any], key: str) -> str:
    """Return a required, non-empty string argument."""
    value = params.get(key)
    if value is None or not str(value).strip():
        raise ValueError(f"'{key}' is required")
    return str(value).strip()


def optional_int(params: dict[str, Any], key: str, default: int | None = None) -> int | None:
    """Return an integer argument, or default when absent."""
    value = params.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' must be an integer, got {value!r}") from exc


def optional_bool(params: dict[str, Any], key: str) -> bool | None:
    value = params.get(key)
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValueError(f"'{key}' must be a boolean, got {value!r}")


async def resolve_application(ctx: ToolContext, params: dict[str, Any]) -> Resolution:
    return await ctx.resolver.resolve(require_str(params, "application"))


async def resolve_sandbox(
    ctx: ToolContext, app_guid: str, params: dict[str, Any]
) -> dict[str, Any] | None:
    """Resolve the optional ``sandbox`` argument to a sandbox document."""
    identifier = params.get("sandbox")
    if not identifier or not str(identifier).strip():
        return None
    return await ctx.resolver.resolve_sandbox(app_guid, str(identifier))


def sandbox_ref(sandbox: dict[str, Any] | None) -> dict[str, Any] | None:
    if sandbox is None:
        return None
    return {"name": sandbox.get("name"), "guid": sandbox.get("guid")}


def application_summary(resolution: Resolution, client: Any) -> dict[str, Any]:
    """Short application block placed at the top of findings documents."""
    app = resolution.application
    profile = app.get("profile") or {}
    summary = {
        "name": resolution.matched_name,
        "id": resolution.canonical_id,
        "business_criticality": profile.get("business_criticality"),
        "app_profile_url": client.to_platform_url(app.get("app_profile_url")),
        "results_url": client.to_platform_url(app.get("results_url")),
        "exact_match": resolution.exact_match,
    }
    if not resolution.exact_match:
        summary["match_note"] = (
            f"No application named exactly as requested; using closest match "
            f"'{resolution.matched_name}'"
        )
    return summary


def format_application(app: dict[str, Any], client: Any) -> dict[str, Any]:
    profile = app.get("profile") or {}
    return {
        "name": profile.get("name"),
        "id": app.get("guid"),
        "legacy_id": app.get("id"),
        "business_criticality": profile.get("business_criticality"),
        "description": profile.get("description"),
        "tags": profile.get("tags"),
        "teams": [t.get("team_name") for t in profile.get("teams") or []],
        "policies": [
            {
                "name": p.get("name"),
                "guid": p.get("guid"),
                "is_default": p.get("is_default"),
                "compliance_status": p.get("policy_compliance_status"),
            }
            for p in profile.get("policies") or []
        ],
        "last_completed_scan_date": app.get("last_completed_scan_date"),
        "created": app.get("created"),
        "modified": app.get("modified"),
        "app_profile_url": client.to_platform_url(app.get("app_profile_url")),
        "results_url": client.to_platform_url(app.get("results_url")),
    }


def format_scan(scan: dict[str, Any], client: Any) -> dict[str, Any]:
    return {
        "scan_id": scan.get("scan_id"),
        "scan_type": scan.get("scan_type"),
        "status": scan.get("status"),
        "created_date": scan.get("created_date"),
        "modified_date": scan.get("modified_date"),
        "policy_compliance_status": scan.get("policy_compliance_status"),
        "scan_url": client.to_platform_url(scan.get("scan_url")),
    }


def format_sandbox(sandbox: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": sandbox.get("name"),
        "guid": sandbox.get("guid"),
        "id": sandbox.get("id"),
        "owner_username": sandbox.get("owner_username"),
        "auto_recreate": sandbox.get("auto_recreate"),
        "created": sandbox.get("created"),
        "modified": sandbox.get("modified"),
        "custom_fields": sandbox.get("custom_fields") or [],
    }


def latest_scan(scans: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Most recently created scan (ISO timestamps compare lexically)."""
    if not scans:
        return None
    return max(scans, key=lambda s: s.get("created_date") or "")


def scan_types(scans: list[dict[str, Any]]) -> list[str]:
    return sorted({str(s["scan_type"]) for s in scans if s.get("scan_type")})
