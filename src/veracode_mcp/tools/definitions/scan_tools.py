"""Tool schemas for scans, sandboxes and static flaw details."""

from typing import Any

from .application_tools import APPLICATION_PROPERTY
from .findings_tools import SANDBOX_PROPERTY, SCAN_TYPES

SCAN_TYPE_PROPERTY: dict[str, Any] = {
    "type": "string",
    "enum": SCAN_TYPES,
    "description": "Only scans of this type.",
}

GET_SCAN_RESULTS_TOOL: dict[str, Any] = {
    "name": "get-scan-results",
    "description": "List scans for an application (policy scans, or one sandbox's scans).",
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "scan_type": SCAN_TYPE_PROPERTY,
            "sandbox": SANDBOX_PROPERTY,
        },
        "required": ["application"],
    },
}

GET_SANDBOX_SCANS_TOOL: dict[str, Any] = {
    "name": "get-sandbox-scans",
    "description": "List scans in every sandbox of an application.",
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "scan_type": SCAN_TYPE_PROPERTY,
        },
        "required": ["application"],
    },
}

COMPARE_POLICY_VS_SANDBOX_SCANS_TOOL: dict[str, Any] = {
    "name": "compare-policy-vs-sandbox-scans",
    "description": (
        "Compare scan coverage between the policy context and all sandboxes to find "
        "scan types that only run in one of them."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "scan_type": SCAN_TYPE_PROPERTY,
        },
        "required": ["application"],
    },
}

GET_SANDBOXES_TOOL: dict[str, Any] = {
    "name": "get-sandboxes",
    "description": "List the development sandboxes of an application.",
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "page": {"type": "integer", "minimum": 0, "description": "Page number (default 0)."},
            "size": {
                "type": "integer",
                "minimum": 1,
                "maximum": 500,
                "description": "Page size (default 50).",
            },
        },
        "required": ["application"],
    },
}

GET_SANDBOX_SUMMARY_TOOL: dict[str, Any] = {
    "name": "get-sandbox-summary",
    "description": "Summarize the sandboxes of an application (names, owners, dates).",
    "input_schema": {
        "type": "object",
        "properties": {"application": APPLICATION_PROPERTY},
        "required": ["application"],
    },
}

GET_STATIC_FLAW_INFO_TOOL: dict[str, Any] = {
    "name": "get-static-flaw-info",
    "description": (
        "Get data path and call stack details for one static analysis flaw, identified by "
        "its issue id within an application."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "issue_id": {"type": "string", "description": "Issue/flaw id."},
            "sandbox": SANDBOX_PROPERTY,
        },
        "required": ["application", "issue_id"],
    },
}
