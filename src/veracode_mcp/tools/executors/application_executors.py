"""Executors for application profile tools."""

from __future__ import annotations

from typing import Any

from ..context import ToolContext
from .common import (
    application_summary,
    format_application,
    format_scan,
    optional_int,
    require_str,
    resolve_application,
)


async def execute_get_application_profiles(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    apps = await ctx.client.list_applications(
        name=params.get("name") or None,
        page=optional_int(params, "page"),
        size=optional_int(params, "size"),
    )
    return {
        "count": len(apps),
        "applications": [format_application(app, ctx.client) for app in apps],
    }


async def execute_search_application_profiles(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    term = require_str(params, "name")
    apps = await ctx.client.search_applications(term)
    data: dict[str, Any] = {
        "search_term": term,
        "count": len(apps),
        "applications": [format_application(app, ctx.client) for app in apps],
    }
    if not apps:
        data["message"] = f"No application profiles match '{term}'"
    return data


async def execute_get_application_profile_details(
    params: dict[str, Any], ctx: ToolContext
) -> dict[str, Any]:
    resolution = await resolve_application(ctx, params)
    app = resolution.application
    if resolution.was_name_lookup:
        app = await ctx.client.get_application(resolution.canonical_id)
    profile = app.get("profile") or {}
    return {
        "application": application_summary(resolution, ctx.client),
        "profile": format_application(app, ctx.client),
        "settings": {
            "archer_app_name": profile.get("archer_app_name"),
            "business_unit": (profile.get("business_unit") or {}).get("name"),
            "business_owners": profile.get("business_owners") or [],
            "custom_fields": profile.get("custom_fields") or [],
        },
        "scans": [format_scan(s, ctx.client) for s in app.get("scans") or []],
    }
