"""Executors for scans, sandboxes and static flaw details."""

from __future__ import annotations

from typing import Any

from veracode_mcp.core.models import parse_scan_type

from ..context import ToolContext
from .common import (
    application_summary,
    format_sandbox,
    format_scan,
    optional_int,
    require_str,
    resolve_application,
    resolve_sandbox,
    sandbox_ref,
    scan_types,
)


def _scan_type_param(params: dict[str, Any]) -> str | None:
    value = params.get("scan_type")
    if not value:
        return None
    scan_type = parse_scan_type(value)
    if scan_type is None:
        raise ValueError(f"scan_type must be one of STATIC, DYNAMIC, MANUAL, SCA, got {value!r}")
    return scan_type.value


async def _sandbox_scans(
    ctx: ToolContext, app_guid: str, scan_type: str | None
) -> list[dict[str, Any]]:
    """Scans of every sandbox, in sandbox order."""
    entries = []
    for sandbox in await ctx.client.list_sandboxes(app_guid):
        scans = await ctx.client.list_scans(
            app_guid, scan_type=scan_type, sandbox_guid=sandbox.get("guid")
        )
        entries.append({"sandbox": sandbox, "scans": scans})
    return entries


async def execute_get_scan_results(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    scan_type = _scan_type_param(params)
    resolution = await resolve_application(ctx, params)
    sandbox = await resolve_sandbox(ctx, resolution.canonical_id, params)
    scans = await ctx.client.list_scans(
        resolution.canonical_id,
        scan_type=scan_type,
        sandbox_guid=sandbox.get("guid") if sandbox else None,
    )
    return {
        "application": application_summary(resolution, ctx.client),
        "sandbox": sandbox_ref(sandbox),
        "scan_type_filter": scan_type or "all",
        "count": len(scans),
        "scans": [format_scan(s, ctx.client) for s in scans],
    }


async def execute_get_sandbox_scans(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    scan_type = _scan_type_param(params)
    resolution = await resolve_application(ctx, params)
    entries = await _sandbox_scans(ctx, resolution.canonical_id, scan_type)
    return {
        "application": application_summary(resolution, ctx.client),
        "scan_type_filter": scan_type or "all",
        "sandbox_count": len(entries),
        "total_scans": sum(len(e["scans"]) for e in entries),
        "sandboxes": [
            {
                "sandbox": sandbox_ref(e["sandbox"]),
                "scan_count": len(e["scans"]),
                "scans": [format_scan(s, ctx.client) for s in e["scans"]],
            }
            for e in entries
        ],
    }


async def execute_compare_policy_vs_sandbox_scans(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    """Compare scan types run in the policy context against those run in sandboxes."""
    scan_type = _scan_type_param(params)
    resolution = await resolve_application(ctx, params)
    guid = resolution.canonical_id
    policy_scans = await ctx.client.list_scans(guid, scan_type=scan_type)
    entries = await _sandbox_scans(ctx, guid, scan_type)

    policy_types = set(scan_types(policy_scans))
    sandbox_types = {t for e in entries for t in scan_types(e["scans"])}
    common = sorted(policy_types & sandbox_types)
    return {
        "application": application_summary(resolution, ctx.client),
        "scan_type_filter": scan_type or "all",
        "policy_scans": {"count": len(policy_scans), "types": sorted(policy_types)},
        "sandbox_scans": {
            "total_count": sum(len(e["scans"]) for e in entries),
            "sandbox_count": len(entries),
            "sandboxes": [
                {
                    "name": e["sandbox"].get("name"),
                    "scan_count": len(e["scans"]),
                    "types": scan_types(e["scans"]),
                }
                for e in entries
            ],
        },
        "analysis": {
            "policy_only_types": sorted(policy_types - sandbox_types),
            "sandbox_only_types": sorted(sandbox_types - policy_types),
            "common_types": common,
            "coverage_assessment": (
                "Good coverage - scans exist in both policy and sandbox contexts"
                if common
                else "Limited coverage - consider running similar scan types across environments"
            ),
        },
    }


async def execute_get_sandboxes(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    resolution = await resolve_application(ctx, params)
    sandboxes = await ctx.client.list_sandboxes(
        resolution.canonical_id,
        page=optional_int(params, "page"),
        size=optional_int(params, "size"),
    )
    return {
        "application": application_summary(resolution, ctx.client),
        "sandbox_count": len(sandboxes),
        "sandboxes": [format_sandbox(s) for s in sandboxes],
    }


async def execute_get_sandbox_summary(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    resolution = await resolve_application(ctx, params)
    sandboxes = await ctx.client.list_sandboxes(resolution.canonical_id)
    summary: dict[str, Any] = {
        "total_count": len(sandboxes),
        "sandboxes": [
            {
                "name": s.get("name"),
                "guid": s.get("guid"),
                "owner": s.get("owner_username"),
                "auto_recreate": s.get("auto_recreate"),
                "created": s.get("created"),
                "modified": s.get("modified"),
            }
            for s in sandboxes
        ],
    }
    if not sandboxes:
        summary["message"] = "No sandboxes found for this application"
    return {
        "application": application_summary(resolution, ctx.client),
        "sandbox_summary": summary,
    }


async def execute_get_static_flaw_info(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    issue_id = require_str(params, "issue_id")
    resolution = await resolve_application(ctx, params)
    sandbox = await resolve_sandbox(ctx, resolution.canonical_id, params)
    info = await ctx.client.get_static_flaw_info(
        resolution.canonical_id, issue_id, sandbox.get("guid") if sandbox else None
    )
    return {
        "application": application_summary(resolution, ctx.client),
        "sandbox": sandbox_ref(sandbox),
        "issue_id": issue_id,
        "static_flaw_info": info,
    }
