"""Executors for software composition analysis tools."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Any

from veracode_mcp.core import analytics
from veracode_mcp.core.errors import UpstreamError
from veracode_mcp.core.models import FilterSet, ScanType

from ..context import ToolContext
from .common import (
    application_summary,
    format_scan,
    latest_scan,
    now_iso,
    optional_bool,
    optional_int,
    resolve_application,
)

logger = logging.getLogger(__name__)

# Summaries look at a sample, not the full result set
SUMMARY_MAX_PAGES = 2
SUMMARY_PAGE_SIZE = 500
APP_RISK_MAX_PAGES = 1
APP_RISK_PAGE_SIZE = 100
RECENT_SCAN_DAYS = 30

CRITICALITY_LEVELS = ["VERY_LOW", "LOW", "MEDIUM", "HIGH", "VERY_HIGH"]
RISK_ORDER = {"HIGH": 3, "MEDIUM": 2, "LOW": 1}


async def _latest_sca_scan(ctx: ToolContext, app_guid: str) -> dict[str, Any] | None:
    scans = await ctx.client.list_scans(app_guid, scan_type=ScanType.SCA.value)
    return latest_scan(scans)


async def execute_get_sca_results(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    """Return SCA findings with exploitability and top-vulnerability analysis."""
    only_exploitable = bool(optional_bool(params, "only_exploitable"))
    max_results = optional_int(params, "max_results")
    if max_results is not None and max_results < 1:
        raise ValueError("'max_results' must be at least 1")

    resolution = await resolve_application(ctx, params)
    guid = resolution.canonical_id
    filters = FilterSet.from_params(
        {
            "scan_type": ScanType.SCA.value,
            "severity_gte": params.get("severity_gte"),
            "cvss_gte": params.get("cvss_gte"),
            "policy_violations_only": optional_bool(params, "only_policy_violations"),
            "new_findings_only": optional_bool(params, "only_new_findings"),
        }
    )

    page_size = max_pages = None
    if max_results is not None and not only_exploitable:
        page_size = min(max_results, SUMMARY_PAGE_SIZE)
        max_pages = math.ceil(max_results / page_size)
    result = await ctx.aggregator.fetch_all(guid, filters, max_pages=max_pages, page_size=page_size)

    findings = result.items
    if only_exploitable:
        findings = [f for f in findings if analytics.is_exploitable(f)]
    if max_results is not None:
        findings = findings[:max_results]

    scan = None if result.scan_type_unavailable else await _latest_sca_scan(ctx, guid)
    analysis = analytics.analyze(findings)

    data: dict[str, Any] = {
        "application": application_summary(resolution, ctx.client),
        "scan_information": {
            "latest_scan": format_scan(scan, ctx.client) if scan else None,
            "note": None if scan else "No SCA scan information available",
        },
        "analysis": {
            "total_findings": analysis.total_findings,
            "exploitable_findings": analysis.exploitable_findings,
            "high_risk_components": analysis.high_risk_components,
            "policy_violations": analysis.policy_violations,
            "risk_level": analysis.risk_level,
            "severity_breakdown": analysis.severity_breakdown,
            "top_vulnerabilities": analysis.top_vulnerabilities,
        },
        "detailed_findings": [f.to_dict() for f in findings],
        "filters_applied": {
            **filters.describe(),
            "only_exploitable": only_exploitable,
            "max_results": max_results,
        },
        "metadata": {
            "total_findings_analyzed": len(findings),
            "pages_retrieved": result.pages_retrieved,
            "data_truncated": result.truncated,
            "analysis_timestamp": now_iso(),
        },
    }
    if result.scan_type_unavailable:
        data["message"] = "No SCA scans found for this application."
    return data


async def execute_get_sca_summary(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    """Summarize SCA risk from a bounded sample of findings."""
    resolution = await resolve_application(ctx, params)
    guid = resolution.canonical_id
    result = await ctx.aggregator.fetch_all(
        guid,
        FilterSet(scan_type=ScanType.SCA),
        max_pages=SUMMARY_MAX_PAGES,
        page_size=SUMMARY_PAGE_SIZE,
    )
    findings = result.items
    scan = None if result.scan_type_unavailable else await _latest_sca_scan(ctx, guid)

    analysis = analytics.analyze(findings)
    exploitable = analysis.exploitable_findings
    high_risk = analysis.high_risk_components
    top = analysis.top_vulnerabilities
    risk = analytics.risk_assessment(exploitable, high_risk, top)
    components = analytics.unique_components(findings)

    if exploitable > 0:
        priority = "exploitable_vulnerabilities"
    elif high_risk > 0:
        priority = "high_risk_components"
    else:
        priority = "licensing_compliance"

    sample_limit = SUMMARY_MAX_PAGES * SUMMARY_PAGE_SIZE
    return {
        "analysis_scope": "sample",
        "application": application_summary(resolution, ctx.client),
        "scan_status": {
            "has_sca_scans": scan is not None,
            "latest_scan_date": scan.get("created_date") if scan else None,
            "latest_scan_status": scan.get("status") if scan else None,
            "policy_compliance": scan.get("policy_compliance_status") if scan else None,
        },
        "risk_assessment": risk,
        "component_overview": {
            "total_components": components,
            "vulnerable_components": components,
            "high_risk_components": high_risk,
            "direct_dependencies": analytics.count_dependencies(findings, "DIRECT"),
            "transitive_dependencies": analytics.count_dependencies(findings, "TRANSITIVE"),
        },
        "vulnerability_summary": {
            "total_findings": analysis.total_findings,
            "exploitable_findings": exploitable,
            "licensing_issues": analytics.count_license_risk(findings),
            "severity_breakdown": analysis.severity_breakdown,
            "top_5_vulnerabilities": top[:5],
        },
        "recommendations": {
            "immediate_actions": (
                [
                    "Review exploitable vulnerabilities",
                    "Update critical components",
                    "Apply security patches",
                ]
                if risk["needs_immediate_attention"]
                else ["Continue monitoring", "Plan component updates"]
            ),
            "priority_focus": priority,
        },
        "metadata": {
            "summary_generated": now_iso(),
            "data_sample_size": len(findings),
            "sample_limit": sample_limit,
            "total_findings_available": result.total_elements,
            "pages_analyzed": result.pages_retrieved,
            "data_truncated": result.truncated,
            "complete_analysis_available": not result.truncated,
            "note": (
                f"Summary computed from a sample of at most {sample_limit} findings; "
                "use get-sca-results for a complete analysis."
            ),
        },
    }


def _is_recent(scan: dict[str, Any], cutoff: datetime) -> bool:
    created = scan.get("created_date")
    if not created:
        return False
    try:
        when = datetime.fromisoformat(str(created).replace("Z", "+00:00"))
    except ValueError:
        return False
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return when > cutoff


async def _app_risk(ctx: ToolContext, app_guid: str) -> dict[str, Any]:
    sample = await ctx.aggregator.fetch_all(
        app_guid,
        FilterSet(scan_type=ScanType.SCA),
        max_pages=APP_RISK_MAX_PAGES,
        page_size=APP_RISK_PAGE_SIZE,
    )
    analysis = analytics.analyze(sample.items)
    high_risk = analysis.high_risk_components
    violations = analysis.policy_violations
    return {
        "total_findings": analysis.total_findings,
        "high_risk_components": high_risk,
        "policy_violations": violations,
        "risk_level": analytics.classify_app_risk(high_risk, violations),
        "severity_breakdown": analysis.severity_breakdown,
        "sample_size_limit": APP_RISK_MAX_PAGES * APP_RISK_PAGE_SIZE,
    }


async def execute_get_sca_apps(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    """List applications with SCA scans, ranked by risk then business criticality."""
    recent_only = bool(optional_bool(params, "include_recent_only"))
    include_risk = optional_bool(params, "include_risk_analysis") is not False
    min_criticality = params.get("min_business_criticality")
    if min_criticality is not None:
        min_criticality = str(min_criticality).upper()
        if min_criticality not in CRITICALITY_LEVELS:
            raise ValueError(
                f"min_business_criticality must be one of {', '.join(CRITICALITY_LEVELS)}"
            )

    apps = await ctx.client.list_applications(size=500)
    if min_criticality:
        floor = CRITICALITY_LEVELS.index(min_criticality)
        apps = [
            app
            for app in apps
            if (app.get("profile") or {}).get("business_criticality") in CRITICALITY_LEVELS
            and CRITICALITY_LEVELS.index(app["profile"]["business_criticality"]) >= floor
        ]

    cutoff = datetime.now(UTC) - timedelta(days=RECENT_SCAN_DAYS)
    sca_apps: list[dict[str, Any]] = []
    skipped: list[dict[str, str]] = []
    for app in apps:
        profile = app.get("profile") or {}
        try:
            scans = await ctx.client.list_scans(app["guid"], scan_type=ScanType.SCA.value)
            relevant = [s for s in scans if _is_recent(s, cutoff)] if recent_only else scans
            if not relevant:
                continue
            risk = await _app_risk(ctx, app["guid"]) if include_risk else None
        except UpstreamError as exc:
            logger.warning("Skipping application %s: %s", profile.get("name"), exc)
            skipped.append({"name": profile.get("name") or "", "error": str(exc)})
            continue
        scan = latest_scan(relevant)
        sca_apps.append(
            {
                "name": profile.get("name"),
                "id": app.get("guid"),
                "business_criticality": profile.get("business_criticality"),
                "total_sca_scans": len(scans),
                "recent_sca_scans": len(relevant),
                "latest_sca_scan": format_scan(scan, ctx.client) if scan else None,
                "risk_assessment": risk,
                "app_profile_url": ctx.client.to_platform_url(app.get("app_profile_url")),
                "results_url": ctx.client.to_platform_url(app.get("results_url")),
            }
        )

    def rank(entry: dict[str, Any]) -> tuple[int, int]:
        risk_level = (entry["risk_assessment"] or {}).get("risk_level")
        criticality = entry["business_criticality"]
        crit_rank = CRITICALITY_LEVELS.index(criticality) + 1 if criticality in CRITICALITY_LEVELS else 0
        return RISK_ORDER.get(risk_level, 0), crit_rank

    sca_apps.sort(key=rank, reverse=True)

    def count_risk(level: str) -> int:
        return sum(1 for a in sca_apps if (a["risk_assessment"] or {}).get("risk_level") == level)

    return {
        "summary": {
            "total_applications_analyzed": len(apps),
            "sca_enabled_applications": len(sca_apps),
            "high_risk_applications": count_risk("HIGH"),
            "medium_risk_applications": count_risk("MEDIUM"),
            "low_risk_applications": count_risk("LOW"),
        },
        "filters_applied": {
            "include_recent_only": recent_only,
            "include_risk_analysis": include_risk,
            "min_business_criticality": min_criticality or "any",
        },
        "applications": sca_apps,
        "skipped_applications": skipped,
        "metadata": {
            "analysis_timestamp": now_iso(),
            "sorted_by": "risk_level_and_business_criticality",
        },
    }
