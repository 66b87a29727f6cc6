"""Tool schemas for findings retrieval and policy compliance."""

from typing import Any

from .application_tools import APPLICATION_PROPERTY

SCAN_TYPES = ["STATIC", "DYNAMIC", "MANUAL", "SCA"]

FILTER_PROPERTIES: dict[str, Any] = {
    "scan_type": {
        "type": "string",
        "enum": SCAN_TYPES,
        "description": "Only return findings of this scan type.",
    },
    "severity": {"type": "integer", "minimum": 0, "maximum": 5, "description": "Exact severity (0-5)."},
    "severity_gte": {
        "type": "integer",
        "minimum": 0,
        "maximum": 5,
        "description": "Minimum severity (0-5).",
    },
    "cwe": {
        "type": "array",
        "items": {"type": "integer"},
        "description": "CWE ids to filter by, e.g. [79, 89].",
    },
    "cvss": {"type": "number", "minimum": 0, "maximum": 10, "description": "Exact CVSS score."},
    "cvss_gte": {"type": "number", "minimum": 0, "maximum": 10, "description": "Minimum CVSS score."},
    "cve": {"type": "string", "description": "Only findings for this CVE id (SCA)."},
    "include_annotations": {
        "type": "boolean",
        "description": "Include mitigation annotations (default: false).",
    },
    "include_expiration_date": {
        "type": "boolean",
        "description": "Include grace period expiration dates (default: false).",
    },
    "new_findings_only": {"type": "boolean", "description": "Only new findings (default: false)."},
    "policy_violations_only": {
        "type": "boolean",
        "description": "Only findings that violate policy (default: false).",
    },
    "sca_dependency_mode": {
        "type": "string",
        "enum": ["UNKNOWN", "DIRECT", "TRANSITIVE", "BOTH"],
        "description": "SCA dependency mode filter.",
    },
    "sca_scan_mode": {
        "type": "string",
        "enum": ["UPLOAD", "AGENT", "BOTH"],
        "description": "SCA scan mode filter.",
    },
}

SANDBOX_PROPERTY: dict[str, Any] = {
    "type": "string",
    "description": (
        "Sandbox GUID or name. Omit for policy (production) findings."
    ),
}

GET_FINDINGS_TOOL: dict[str, Any] = {
    "name": "get-findings",
    "description": (
        "Get findings for an application (STATIC, DYNAMIC, MANUAL, SCA) with filtering, "
        "severity/scan type/status breakdowns and automatic pagination. By default every page "
        "is retrieved up to max_pages; the result says whether it was truncated."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "sandbox": SANDBOX_PROPERTY,
            **FILTER_PROPERTIES,
            "paging_mode": {
                "type": "string",
                "enum": ["all", "single"],
                "description": "'all' walks every page (default), 'single' returns one page.",
            },
            "page": {
                "type": "integer",
                "minimum": 0,
                "description": "Page number for single mode (0-based, default 0).",
            },
            "page_size": {
                "type": "integer",
                "minimum": 1,
                "maximum": 500,
                "description": "Findings per page (max 500, default 500).",
            },
            "max_pages": {
                "type": "integer",
                "minimum": 1,
                "maximum": 100,
                "description": "Page ceiling in 'all' mode (default 50).",
            },
        },
        "required": ["application"],
    },
}

GET_FINDINGS_PAGINATED_TOOL: dict[str, Any] = {
    "name": "get-findings-paginated",
    "description": (
        "Get one specific page of findings with navigation details (next/previous/last page). "
        "Use for precise control over large result sets."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "sandbox": SANDBOX_PROPERTY,
            **FILTER_PROPERTIES,
            "page": {"type": "integer", "minimum": 0, "description": "Page number (0-based, default 0)."},
            "page_size": {
                "type": "integer",
                "minimum": 1,
                "maximum": 500,
                "description": "Findings per page (max 500, default 100).",
            },
        },
        "required": ["application"],
    },
}

GET_POLICY_COMPLIANCE_TOOL: dict[str, Any] = {
    "name": "get-policy-compliance",
    "description": (
        "Get the policy compliance status of an application with open policy violations "
        "counted by severity."
    ),
    "input_schema": {
        "type": "object",
        "properties": {"application": APPLICATION_PROPERTY},
        "required": ["application"],
    },
}
