"""JSON-Schema tool definitions exposed over MCP and the CLI."""

from typing import Any

from .application_tools import (
    GET_APPLICATION_PROFILE_DETAILS_TOOL,
    GET_APPLICATION_PROFILES_TOOL,
    SEARCH_APPLICATION_PROFILES_TOOL,
)
from .findings_tools import (
    GET_FINDINGS_PAGINATED_TOOL,
    GET_FINDINGS_TOOL,
    GET_POLICY_COMPLIANCE_TOOL,
)
from .policy_tools import (
    GET_POLICIES_TOOL,
    GET_POLICY_SETTINGS_TOOL,
    GET_POLICY_TOOL,
    GET_POLICY_VERSION_TOOL,
    GET_POLICY_VERSIONS_TOOL,
    GET_SCA_LICENSES_TOOL,
)
from .sca_tools import GET_SCA_APPS_TOOL, GET_SCA_RESULTS_TOOL, GET_SCA_SUMMARY_TOOL
from .scan_tools import (
    COMPARE_POLICY_VS_SANDBOX_SCANS_TOOL,
    GET_SANDBOX_SCANS_TOOL,
    GET_SANDBOX_SUMMARY_TOOL,
    GET_SANDBOXES_TOOL,
    GET_SCAN_RESULTS_TOOL,
    GET_STATIC_FLAW_INFO_TOOL,
)

__all__ = [
    "COMPARE_POLICY_VS_SANDBOX_SCANS_TOOL",
    "GET_APPLICATION_PROFILES_TOOL",
    "GET_APPLICATION_PROFILE_DETAILS_TOOL",
    "GET_FINDINGS_PAGINATED_TOOL",
    "GET_FINDINGS_TOOL",
    "GET_POLICIES_TOOL",
    "GET_POLICY_COMPLIANCE_TOOL",
    "GET_POLICY_SETTINGS_TOOL",
    "GET_POLICY_TOOL",
    "GET_POLICY_VERSIONS_TOOL",
    "GET_POLICY_VERSION_TOOL",
    "GET_SANDBOXES_TOOL",
    "GET_SANDBOX_SCANS_TOOL",
    "GET_SANDBOX_SUMMARY_TOOL",
    "GET_SCAN_RESULTS_TOOL",
    "GET_SCA_APPS_TOOL",
    "GET_SCA_LICENSES_TOOL",
    "GET_SCA_RESULTS_TOOL",
    "GET_SCA_SUMMARY_TOOL",
    "GET_STATIC_FLAW_INFO_TOOL",
    "SEARCH_APPLICATION_PROFILES_TOOL",
    "get_all_tools",
    "get_tool",
]


def get_all_tools() -> list[dict[str, Any]]:
    """Return every tool definition, grouped by area."""
    return [
        GET_APPLICATION_PROFILES_TOOL,
        SEARCH_APPLICATION_PROFILES_TOOL,
        GET_APPLICATION_PROFILE_DETAILS_TOOL,
        GET_FINDINGS_TOOL,
        GET_FINDINGS_PAGINATED_TOOL,
        GET_POLICY_COMPLIANCE_TOOL,
        GET_SCA_RESULTS_TOOL,
        GET_SCA_SUMMARY_TOOL,
        GET_SCA_APPS_TOOL,
        GET_SCAN_RESULTS_TOOL,
        GET_SANDBOX_SCANS_TOOL,
        COMPARE_POLICY_VS_SANDBOX_SCANS_TOOL,
        GET_SANDBOXES_TOOL,
        GET_SANDBOX_SUMMARY_TOOL,
        GET_STATIC_FLAW_INFO_TOOL,
        GET_POLICIES_TOOL,
        GET_POLICY_TOOL,
        GET_POLICY_VERSIONS_TOOL,
        GET_POLICY_VERSION_TOOL,
        GET_POLICY_SETTINGS_TOOL,
        GET_SCA_LICENSES_TOOL,
    ]


def get_tool(name: str) -> dict[str, Any] | None:
    """Return the definition of one tool, or None."""
    return next((tool for tool in get_all_tools() if tool["name"] == name), None)
