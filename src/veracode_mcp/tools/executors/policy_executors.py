"""Executors for policy tools. Bodies are passed through as returned."""

from __future__ import annotations

from typing import Any

from ..context import ToolContext
from .common import optional_bool, optional_int, require_str


async def execute_get_policies(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    category = params.get("category")
    if category is not None and str(category).upper() not in ("APPLICATION", "COMPONENT"):
        raise ValueError("category must be APPLICATION or COMPONENT")
    return await ctx.client.list_policies(
        category=str(category).upper() if category else None,
        legacy_policy_id=optional_int(params, "legacy_policy_id"),
        name=params.get("name") or None,
        name_exact=optional_bool(params, "name_exact"),
        page=optional_int(params, "page"),
        public_policy=optional_bool(params, "public_policy"),
        size=optional_int(params, "size"),
        vendor_policy=optional_bool(params, "vendor_policy"),
    )


async def execute_get_policy(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    return await ctx.client.get_policy(require_str(params, "policy_guid"))


async def execute_get_policy_versions(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    return await ctx.client.list_policy_versions(
        require_str(params, "policy_guid"),
        page=optional_int(params, "page"),
        size=optional_int(params, "size"),
    )


async def execute_get_policy_version(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    version = optional_int(params, "version")
    if version is None:
        raise ValueError("'version' is required")
    return await ctx.client.get_policy_version(require_str(params, "policy_guid"), version)


async def execute_get_policy_settings(_params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    return await ctx.client.get_policy_settings()


async def execute_get_sca_licenses(params: dict[str, Any], ctx: ToolContext) -> dict[str, Any]:
    return await ctx.client.list_sca_licenses(
        page=optional_int(params, "page"),
        size=optional_int(params, "size"),
        sort=params.get("sort") or None,
    )
