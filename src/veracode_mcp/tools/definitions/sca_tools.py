"""Tool schemas for software composition analysis."""

from typing import Any

from .application_tools import APPLICATION_PROPERTY

GET_SCA_RESULTS_TOOL: dict[str, Any] = {
    "name": "get-sca-results",
    "description": (
        "Get Software Composition Analysis findings for an application with an analysis of "
        "exploitable and high-risk components and the top vulnerabilities by CVSS."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "application": APPLICATION_PROPERTY,
            "severity_gte": {
                "type": "integer",
                "minimum": 0,
                "maximum": 5,
                "description": "Minimum severity (0-5).",
            },
            "cvss_gte": {"type": "number", "minimum": 0, "maximum": 10, "description": "Minimum CVSS."},
            "only_policy_violations": {"type": "boolean", "description": "Only policy violations."},
            "only_new_findings": {"type": "boolean", "description": "Only new findings."},
            "only_exploitable": {
                "type": "boolean",
                "description": "Only findings with an observed exploit.",
            },
            "max_results": {
                "type": "integer",
                "minimum": 1,
                "description": "Maximum number of findings to return.",
            },
        },
        "required": ["application"],
    },
}

GET_SCA_SUMMARY_TOOL: dict[str, Any] = {
    "name": "get-sca-summary",
    "description": (
        "Get a high-level SCA summary (risk assessment, component overview, recommendations) "
        "computed from a sample of at most 1000 findings."
    ),
    "input_schema": {
        "type": "object",
        "properties": {"application": APPLICATION_PROPERTY},
        "required": ["application"],
    },
}

GET_SCA_APPS_TOOL: dict[str, Any] = {
    "name": "get-sca-apps",
    "description": (
        "List applications that have SCA scans, ranked by risk level and business criticality."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "include_recent_only": {
                "type": "boolean",
                "description": "Only applications with an SCA scan in the last 30 days.",
            },
            "include_risk_analysis": {
                "type": "boolean",
                "description": "Sample findings for a per-application risk level (default: true).",
            },
            "min_business_criticality": {
                "type": "string",
                "enum": ["VERY_LOW", "LOW", "MEDIUM", "HIGH", "VERY_HIGH"],
                "description": "Minimum business criticality.",
            },
        },
    },
}
