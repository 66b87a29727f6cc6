"""Policy endpoints."""

from typing import Any


def _present(**values: Any) -> dict[str, Any] | None:
    params = {}
    for key, value in values.items():
        if value is None:
            continue
        params[key] = ("true" if value else "false") if isinstance(value, bool) else value
    return params or None


class PoliciesMixin:
    """Provide policy, policy version, settings and license list lookups."""

    async def list_policies(
        self,
        category: str | None = None,
        legacy_policy_id: int | None = None,
        name: str | None = None,
        name_exact: bool | None = None,
        page: int | None = None,
        public_policy: bool | None = None,
        size: int | None = None,
        vendor_policy: bool | None = None,
    ) -> dict[str, Any]:
        params = _present(
            category=category,
            legacy_policy_id=legacy_policy_id,
            name=name,
            name_exact=name_exact,
            page=page,
            public_policy=public_policy,
            size=size,
            vendor_policy=vendor_policy,
        )
        return await self.get_json("appsec/v1/policies", params=params)

    async def get_policy(self, policy_guid: str) -> dict[str, Any]:
        return await self.get_json(f"appsec/v1/policies/{policy_guid}")

    async def list_policy_versions(
        self, policy_guid: str, page: int | None = None, size: int | None = None
    ) -> dict[str, Any]:
        return await self.get_json(
            f"appsec/v1/policies/{policy_guid}/versions", params=_present(page=page, size=size)
        )

    async def get_policy_version(self, policy_guid: str, version: int) -> dict[str, Any]:
        return await self.get_json(f"appsec/v1/policies/{policy_guid}/versions/{version}")

    async def get_policy_settings(self) -> dict[str, Any]:
        return await self.get_json("appsec/v1/policy_settings")

    async def list_sca_licenses(
        self, page: int | None = None, size: int | None = None, sort: str | None = None
    ) -> dict[str, Any]:
        return await self.get_json(
            "appsec/v1/policy_licenselist", params=_present(page=page, size=size, sort=sort)
        )
