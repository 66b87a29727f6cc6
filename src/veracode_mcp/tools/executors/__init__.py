"""Execute tool calls coming from MCP or the CLI.

Each public ``execute_*`` coroutine takes the tool-call arguments and a
``ToolContext`` and returns the tool's ``data`` document. ``dispatch_tool``
wraps that document (or the failure) in the success/error envelope.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from veracode_mcp.core.errors import NotFoundError, VeracodeError
from veracode_mcp.utils.debug import debug_tool_execution

from ..context import ToolContext
from ..envelope import err, ok
from .application_executors import (
    execute_get_application_profile_details,
    execute_get_application_profiles,
    execute_search_application_profiles,
)
from .findings_executors import (
    execute_get_findings,
    execute_get_findings_paginated,
    execute_get_policy_compliance,
)
from .policy_executors import (
    execute_get_policies,
    execute_get_policy,
    execute_get_policy_settings,
    execute_get_policy_version,
    execute_get_policy_versions,
    execute_get_sca_licenses,
)
from .sca_executors import execute_get_sca_apps, execute_get_sca_results, execute_get_sca_summary
from .scan_executors import (
    execute_compare_policy_vs_sandbox_scans,
    execute_get_sandbox_scans,
    execute_get_sandbox_summary,
    execute_get_sandboxes,
    execute_get_scan_results,
    execute_get_static_flaw_info,
)

__all__ = [
    "TOOL_EXECUTORS",
    "dispatch_tool",
    "execute_compare_policy_vs_sandbox_scans",
    "execute_get_application_profile_details",
    "execute_get_application_profiles",
    "execute_get_findings",
    "execute_get_findings_paginated",
    "execute_get_policies",
    "execute_get_policy",
    "execute_get_policy_compliance",
    "execute_get_policy_settings",
    "execute_get_policy_version",
    "execute_get_policy_versions",
    "execute_get_sandbox_scans",
    "execute_get_sandbox_summary",
    "execute_get_sandboxes",
    "execute_get_sca_apps",
    "execute_get_sca_licenses",
    "execute_get_sca_results",
    "execute_get_sca_summary",
    "execute_get_scan_results",
    "execute_get_static_flaw_info",
    "execute_search_application_profiles",
]

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

TOOL_EXECUTORS: dict[str, Any] = {
    "get-application-profiles": execute_get_application_profiles,
    "search-application-profiles": execute_search_application_profiles,
    "get-application-profile-details": execute_get_application_profile_details,
    "get-findings": execute_get_findings,
    "get-findings-paginated": execute_get_findings_paginated,
    "get-policy-compliance": execute_get_policy_compliance,
    "get-sca-results": execute_get_sca_results,
    "get-sca-summary": execute_get_sca_summary,
    "get-sca-apps": execute_get_sca_apps,
    "get-scan-results": execute_get_scan_results,
    "get-sandbox-scans": execute_get_sandbox_scans,
    "compare-policy-vs-sandbox-scans": execute_compare_policy_vs_sandbox_scans,
    "get-sandboxes": execute_get_sandboxes,
    "get-sandbox-summary": execute_get_sandbox_summary,
    "get-static-flaw-info": execute_get_static_flaw_info,
    "get-policies": execute_get_policies,
    "get-policy": execute_get_policy,
    "get-policy-versions": execute_get_policy_versions,
    "get-policy-version": execute_get_policy_version,
    "get-policy-settings": execute_get_policy_settings,
    "get-sca-licenses": execute_get_sca_licenses,
}


async def dispatch_tool(
    name: str, params: dict[str, Any] | None, ctx: ToolContext
) -> dict[str, Any]:
    """Run the named tool and return its envelope.

    Unknown tool names and execution errors come back as failure envelopes
    (never raised), so callers only ever see ``{"success": ...}`` documents.
    """
    params = params or {}
    debug_tool_execution(tool_name=name, params=params, start=True)

    start_time = time.time()
    executor = TOOL_EXECUTORS.get(name)
    if executor is None:
        envelope = err(f"Unknown tool: {name}")
    else:
        try:
            envelope = ok(await executor(params, ctx))
        except NotFoundError as exc:
            envelope = err(str(exc))
        except ValueError as exc:
            envelope = err(f"Invalid arguments for {name}: {exc}")
        except VeracodeError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            envelope = err(f"Error executing {name}: {exc}")
        except Exception as exc:
            logger.warning("Tool %s raised unexpectedly", name, exc_info=True)
            envelope = err(f"Unexpected error in {name}: {exc}")

    debug_tool_execution(
        tool_name=name,
        params=params,
        start=False,
        elapsed=time.time() - start_time,
        success=envelope["success"],
    )
    return envelope
