"""Resolve application and sandbox identifiers (GUID or name) to GUIDs."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .errors import NotFoundError

logger = logging.getLogger(__name__)

GUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_guid(value: str) -> bool:
    """Return True if value looks like a platform GUID."""
    return bool(GUID_PATTERN.match(value.strip()))


def application_name(app: dict[str, Any]) -> str:
    return (app.get("profile") or {}).get("name") or ""


@dataclass
class Resolution:
    """Outcome of resolving an application identifier."""

    canonical_id: str
    matched_name: str
    was_name_lookup: bool
    exact_match: bool = True
    application: dict[str, Any] = field(default_factory=dict, repr=False)


class ApplicationResolver:
    """Turn a user-supplied identifier into an application GUID.

    GUID-shaped identifiers are fetched directly. Anything else is treated as
    a name: a case-insensitive exact match wins, otherwise the first search
    result is used and the resolution is marked ``exact_match=False``.
    Nothing is cached between calls.
    """

    def __init__(self, client: Any):
        self.client = client

    async def resolve(self, identifier: str) -> Resolution:
        """Resolve an application GUID or name.

        Raises:
            ValueError: if identifier is empty
            NotFoundError: if nothing matches
        """
        identifier = (identifier or "").strip()
        if not identifier:
            raise ValueError("Application identifier (GUID or name) is required")

        if is_guid(identifier):
            app = await self.client.get_application(identifier)
            if not app:
                raise NotFoundError(f"No application found with ID: {identifier}")
            return Resolution(
                canonical_id=app.get("guid") or identifier,
                matched_name=application_name(app),
                was_name_lookup=False,
                application=app,
            )

        candidates = await self.client.search_applications(identifier)
        if not candidates:
            raise NotFoundError(f"No application found with name: {identifier}")

        wanted = identifier.lower()
        for app in candidates:
            if application_name(app).lower() == wanted:
                return Resolution(
                    canonical_id=app["guid"],
                    matched_name=application_name(app),
                    was_name_lookup=True,
                    application=app,
                )

        app = candidates[0]
        logger.warning(
            'No exact match found for "%s". Using first result: "%s"',
            identifier,
            application_name(app),
        )
        return Resolution(
            canonical_id=app["guid"],
            matched_name=application_name(app),
            was_name_lookup=True,
            exact_match=False,
            application=app,
        )

    async def resolve_sandbox(self, app_guid: str, identifier: str) -> dict[str, Any]:
        """Find a sandbox of app_guid by GUID or case-insensitive name.

        Raises:
            NotFoundError: if the application has no such sandbox
        """
        identifier = identifier.strip()
        sandboxes = await self.client.list_sandboxes(app_guid)
        if is_guid(identifier):
            for sandbox in sandboxes:
                if (sandbox.get("guid") or "").lower() == identifier.lower():
                    return sandbox
        else:
            wanted = identifier.lower()
            for sandbox in sandboxes:
                if (sandbox.get("name") or "").lower() == wanted:
                    return sandbox
        available = ", ".join(s.get("name") or s.get("guid") or "?" for s in sandboxes) or "none"
        raise NotFoundError(
            f"Sandbox '{identifier}' not found for this application. Available sandboxes: {available}"
        )
