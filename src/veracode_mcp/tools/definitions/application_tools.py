"""Tool schemas for application profiles."""

from typing import Any

APPLICATION_PROPERTY: dict[str, Any] = {
    "type": "string",
    "description": "Application profile GUID or application name.",
}

GET_APPLICATION_PROFILES_TOOL: dict[str, Any] = {
    "name": "get-application-profiles",
    "description": (
        "List application profiles with their business criticality, policies and links. "
        "Use to discover which applications exist before asking for scans or findings."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "Optional name filter (partial match).",
            },
            "page": {"type": "integer", "minimum": 0, "description": "Page number (0-based)."},
            "size": {
                "type": "integer",
                "minimum": 1,
                "maximum": 500,
                "description": "Page size (1-500).",
            },
        },
    },
}

SEARCH_APPLICATION_PROFILES_TOOL: dict[str, Any] = {
    "name": "search-application-profiles",
    "description": "Search application profiles by name (partial match, case-insensitive).",
    "input_schema": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name or part of a name to search for."},
        },
        "required": ["name"],
    },
}

GET_APPLICATION_PROFILE_DETAILS_TOOL: dict[str, Any] = {
    "name": "get-application-profile-details",
    "description": (
        "Get the full profile of one application: description, teams, policies, "
        "compliance status and latest scans."
    ),
    "input_schema": {
        "type": "object",
        "properties": {"application": APPLICATION_PROPERTY},
        "required": ["application"],
    },
}
