"""Tool schemas for security policies."""

from typing import Any

POLICY_GUID_PROPERTY: dict[str, Any] = {
    "type": "string",
    "description": "Policy GUID.",
}

PAGE_PROPERTIES: dict[str, Any] = {
    "page": {"type": "integer", "minimum": 0, "description": "Page number (default 0)."},
    "size": {"type": "integer", "minimum": 1, "maximum": 500, "description": "Page size (1-500)."},
}

GET_POLICIES_TOOL: dict[str, Any] = {
    "name": "get-policies",
    "description": "List security policies with optional filtering.",
    "input_schema": {
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "enum": ["APPLICATION", "COMPONENT"],
                "description": "Policy category.",
            },
            "legacy_policy_id": {"type": "integer", "description": "Legacy platform policy id."},
            "name": {"type": "string", "description": "Policy name (partial match)."},
            "name_exact": {"type": "boolean", "description": "Match the name exactly."},
            "public_policy": {
                "type": "boolean",
                "description": "Include public Veracode policies (default: true).",
            },
            "vendor_policy": {"type": "boolean", "description": "Vendor policy flag."},
            **PAGE_PROPERTIES,
        },
    },
}

GET_POLICY_TOOL: dict[str, Any] = {
    "name": "get-policy",
    "description": "Get the latest version of a policy.",
    "input_schema": {
        "type": "object",
        "properties": {"policy_guid": POLICY_GUID_PROPERTY},
        "required": ["policy_guid"],
    },
}

GET_POLICY_VERSIONS_TOOL: dict[str, Any] = {
    "name": "get-policy-versions",
    "description": "List all versions of a policy.",
    "input_schema": {
        "type": "object",
        "properties": {"policy_guid": POLICY_GUID_PROPERTY, **PAGE_PROPERTIES},
        "required": ["policy_guid"],
    },
}

GET_POLICY_VERSION_TOOL: dict[str, Any] = {
    "name": "get-policy-version",
    "description": "Get one specific version of a policy.",
    "input_schema": {
        "type": "object",
        "properties": {
            "policy_guid": POLICY_GUID_PROPERTY,
            "version": {"type": "integer", "minimum": 1, "description": "Policy version number."},
        },
        "required": ["policy_guid", "version"],
    },
}

GET_POLICY_SETTINGS_TOOL: dict[str, Any] = {
    "name": "get-policy-settings",
    "description": "Get the default policy assigned to each business criticality level.",
    "input_schema": {"type": "object", "properties": {}},
}

GET_SCA_LICENSES_TOOL: dict[str, Any] = {
    "name": "get-sca-licenses",
    "description": "List the component licenses known to SCA policies.",
    "input_schema": {
        "type": "object",
        "properties": {
            **PAGE_PROPERTIES,
            "sort": {"type": "string", "description": "Sort order, e.g. 'name,asc'."},
        },
    },
}
