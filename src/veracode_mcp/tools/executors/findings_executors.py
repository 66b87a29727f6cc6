"""Executors for findings retrieval and policy compliance."""

from __future__ import annotations

from typing import Any

from veracode_mcp.core import analytics
from veracode_mcp.core.aggregator import DEFAULT_MAX_PAGES
from veracode_mcp.core.fetcher import DEFAULT_PAGE_SIZE
from veracode_mcp.core.models import FilterSet, Finding

from ..context import ToolContext
from .common import (
    application_summary,
    now_iso,
    optional_int,
    resolve_application,
    resolve_sandbox,
    sandbox_ref,
)

FINDINGS_ENDPOINT = "appsec/v2/applications/{guid}/findings"
PAGINATED_DEFAULT_PAGE_SIZE = 100
PAGING_MODES = ("all", "single")


def _findings_summary(findings: list[Finding]) -> dict[str, Any]:
    analysis = analytics.analyze(findings)
    return {
        "policy_violations": analysis.policy_violations,
        "severity_breakdown": analysis.severity_breakdown,
        "scan_type_breakdown": analysis.scan_type_breakdown,
        "status_breakdown": analysis.status_breakdown,
        "cwe_breakdown": analysis.cwe_breakdown,
    }


def _unavailable_message(filters: FilterSet, available: list[str]) -> str:
    if not available:
        return "No scans found for this application, so there are no findings to report."
    wanted = filters.scan_type.value if filters.scan_type else "requested"
    return (
        f"No {wanted} scans found for this application. "
        f"Available scan types: {', '.join(available)}."
    )


async def _prepare(
    ctx: ToolContext, params: dict[str, Any]
) -> tuple[Any, dict[str, Any] | None, FilterSet]:
    resolution = await resolve_application(ctx, params)
    sandbox = await resolve_sandbox(ctx, resolution.canonical_id, params)
    filter_params = dict(params)
    filter_params["context"] = sandbox.get("guid") if sandbox else None
    return resolution, sandbox, FilterSet.from_params(filter_params)


async def execute_get_findings(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    """Return findings with breakdowns, in single-page or all-pages mode."""
    mode = str(params.get("paging_mode") or "all").lower()
    if mode not in PAGING_MODES:
        raise ValueError(f"paging_mode must be 'all' or 'single', got {mode!r}")
    page_size = optional_int(params, "page_size", DEFAULT_PAGE_SIZE)
    max_pages = optional_int(params, "max_pages", DEFAULT_MAX_PAGES)

    resolution, sandbox, filters = await _prepare(ctx, params)
    guid = resolution.canonical_id

    if mode == "single":
        page = await ctx.fetcher.fetch_page(
            guid, filters, page=optional_int(params, "page", 0), size=page_size
        )
        findings = page.items
        pages_retrieved = 0 if page.scan_type_unavailable else 1
        total_pages, total_elements = page.total_pages, page.total_elements
        more_available = page.has_next
        truncated = False
        unavailable, available = page.scan_type_unavailable, page.available_scan_types
        page_size = page.page_size
    else:
        result = await ctx.aggregator.fetch_all(guid, filters, max_pages=max_pages, page_size=page_size)
        findings = result.items
        pages_retrieved = result.pages_retrieved
        total_pages, total_elements = result.total_pages, result.total_elements
        truncated = result.truncated
        more_available = truncated
        unavailable, available = result.scan_type_unavailable, result.available_scan_types
        page_size, max_pages = result.page_size, result.max_pages

    if truncated:
        completeness = "truncated"
    elif more_available:
        completeness = "single_page"
    else:
        completeness = "complete"

    data: dict[str, Any] = {
        "application": application_summary(resolution, ctx.client),
        "sandbox": sandbox_ref(sandbox),
        "findings_summary": {
            "total_findings_retrieved": len(findings),
            "total_findings_available": total_elements,
            "pages_retrieved": pages_retrieved,
            "total_pages_available": total_pages,
            "data_truncated": truncated,
            **_findings_summary(findings),
        },
        "filters_applied": filters.describe(),
        "pagination_info": {
            "paging_mode": mode,
            "page_size": page_size,
            "max_pages_limit": max_pages if mode == "all" else None,
            "retrieval_complete": not more_available,
        },
        "findings": [f.to_dict() for f in findings],
        "metadata": {
            "retrieval_timestamp": now_iso(),
            "api_endpoint": FINDINGS_ENDPOINT,
            "data_completeness": completeness,
        },
    }
    if unavailable:
        data["message"] = _unavailable_message(filters, available)
    if truncated:
        data["warning"] = (
            f"Results incomplete: stopped after {pages_retrieved} pages of {total_pages}. "
            "Narrow the filters or raise max_pages to see everything."
        )
    return data


async def execute_get_findings_paginated(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    """Return one page of findings plus navigation hints."""
    resolution, sandbox, filters = await _prepare(ctx, params)
    page = await ctx.fetcher.fetch_page(
        resolution.canonical_id,
        filters,
        page=optional_int(params, "page", 0),
        size=optional_int(params, "page_size", PAGINATED_DEFAULT_PAGE_SIZE),
    )
    data: dict[str, Any] = {
        "application": application_summary(resolution, ctx.client),
        "sandbox": sandbox_ref(sandbox),
        "pagination": page.pagination_dict(),
        "findings": [f.to_dict() for f in page.items],
        "page_info": {
            "current_page": page.page_index,
            "display": f"Page {page.page_index + 1} of {page.total_pages}",
            "findings_on_page": len(page.items),
            "has_next_page": page.has_next,
            "has_previous_page": page.has_previous,
            "total_pages": page.total_pages,
            "total_findings": page.total_elements,
        },
        "navigation": {
            "next_page": page.page_index + 1 if page.has_next else None,
            "previous_page": page.page_index - 1 if page.has_previous else None,
            "last_page": max(page.total_pages - 1, 0),
        },
        "filters_applied": filters.describe(),
    }
    if page.scan_type_unavailable:
        data["message"] = _unavailable_message(filters, page.available_scan_types)
    return data


async def execute_get_policy_compliance(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    """Map the primary policy's status and count open violations by severity."""
    resolution = await resolve_application(ctx, params)
    guid = resolution.canonical_id
    app = resolution.application
    if resolution.was_name_lookup:
        app = await ctx.client.get_application(guid)

    result = await ctx.aggregator.fetch_all(guid, FilterSet(violates_policy=True))
    violations = [f for f in result.items if f.violates_policy]
    by_severity = analytics.severity_counts_by_level(violations)

    policies = (app.get("profile") or {}).get("policies") or []
    primary = next((p for p in policies if p.get("is_default")), policies[0] if policies else None)
    backend_status = primary.get("policy_compliance_status") if primary else None

    return {
        "application": application_summary(resolution, ctx.client),
        "policy": {
            "name": primary.get("name"),
            "guid": primary.get("guid"),
            "backend_status": backend_status,
        }
        if primary
        else None,
        "policy_compliance_status": analytics.compliance_status(backend_status, len(violations)),
        "policy_violations": len(violations),
        "violations_by_severity": by_severity,
        "summary": {
            "has_critical_violations": by_severity["5"] > 0,
            "has_high_violations": by_severity["4"] > 0,
            "total_open_violations": len(violations),
        },
        "data_truncated": result.truncated,
        "metadata": {"retrieval_timestamp": now_iso(), "pages_retrieved": result.pages_retrieved},
    }
