"""Data models for findings, filters and pages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ScanType(str, Enum):
    """Analysis type that produced a finding."""

    STATIC = "STATIC"
    DYNAMIC = "DYNAMIC"
    MANUAL = "MANUAL"
    SCA = "SCA"


SCA_DEPENDENCY_MODES = ("UNKNOWN", "DIRECT", "TRANSITIVE", "BOTH")
SCA_SCAN_MODES = ("UPLOAD", "AGENT", "BOTH")


def _as_int(value: Any, default: int | None = None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Finding details, one variant per scan type
# ---------------------------------------------------------------------------


@dataclass
class FindingDetail:
    """Fields shared by every scan type."""

    severity: int = 0
    cwe_id: int | None = None
    cwe_name: str = ""

    @classmethod
    def _common(cls, raw: dict[str, Any]) -> dict[str, Any]:
        cwe = raw.get("cwe") or {}
        return {
            "severity": _as_int(raw.get("severity"), 0),
            "cwe_id": _as_int(cwe.get("id")) if isinstance(cwe, dict) else None,
            "cwe_name": (cwe.get("name") or "") if isinstance(cwe, dict) else "",
        }

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "FindingDetail":
        return cls(**cls._common(raw))


@dataclass
class StaticDetail(FindingDetail):
    """Source-code location of a static analysis flaw."""

    file_path: str = ""
    file_name: str = ""
    file_line_number: int | None = None
    module: str = ""
    procedure: str = ""
    attack_vector: str = ""
    exploitability: int | None = None
    finding_category: str = ""
    relative_location: int | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "StaticDetail":
        category = raw.get("finding_category") or {}
        return cls(
            **cls._common(raw),
            file_path=raw.get("file_path") or "",
            file_name=raw.get("file_name") or "",
            file_line_number=_as_int(raw.get("file_line_number")),
            module=raw.get("module") or "",
            procedure=raw.get("procedure") or "",
            attack_vector=raw.get("attack_vector") or "",
            exploitability=_as_int(raw.get("exploitability")),
            finding_category=category.get("name", "") if isinstance(category, dict) else str(category),
            relative_location=_as_int(raw.get("relative_location")),
        )


@dataclass
class DynamicDetail(FindingDetail):
    """Endpoint where a dynamic analysis flaw was observed."""

    url: str = ""
    hostname: str = ""
    port: str = ""
    path: str = ""
    plugin: str = ""
    vulnerable_parameter: str = ""
    attack_vector: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "DynamicDetail":
        return cls(
            **cls._common(raw),
            url=raw.get("URL") or raw.get("url") or "",
            hostname=raw.get("hostname") or "",
            port=str(raw.get("port") or ""),
            path=raw.get("path") or "",
            plugin=raw.get("plugin") or "",
            vulnerable_parameter=raw.get("vulnerable_parameter") or "",
            attack_vector=raw.get("attack_vector") or "",
        )


@dataclass
class ManualDetail(FindingDetail):
    """Penetration-test write-up for a manual finding."""

    capec_id: int | None = None
    exploit_desc: str = ""
    exploit_difficulty: str = ""
    input_vector: str = ""
    location: str = ""
    module: str = ""
    remediation_desc: str = ""
    severity_desc: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ManualDetail":
        return cls(
            **cls._common(raw),
            capec_id=_as_int(raw.get("capec_id")),
            exploit_desc=raw.get("exploit_desc") or "",
            exploit_difficulty=str(raw.get("exploit_difficulty") or ""),
            input_vector=raw.get("input_vector") or "",
            location=raw.get("location") or "",
            module=raw.get("module") or "",
            remediation_desc=raw.get("remediation_desc") or "",
            severity_desc=raw.get("severity_desc") or "",
        )


@dataclass
class Exploitability:
    """Exploit intelligence attached to a CVE."""

    exploit_observed: bool = False
    epss_score: float | None = None
    epss_percentile: float | None = None
    exploit_source: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Exploitability":
        return cls(
            exploit_observed=raw.get("exploit_observed") is True,
            epss_score=_as_float(raw.get("epss_score")),
            epss_percentile=_as_float(raw.get("epss_percentile")),
            exploit_source=raw.get("exploit_source") or "",
        )


@dataclass
class Cve:
    """Known vulnerability in a third-party component."""

    name: str = ""
    cvss: float | None = None
    severity: str = ""
    href: str = ""
    vector: str = ""
    exploitability: Exploitability | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Cve":
        exploitability = raw.get("exploitability")
        return cls(
            name=raw.get("name") or "",
            cvss=_as_float(raw.get("cvss")),
            severity=str(raw.get("severity") or ""),
            href=raw.get("href") or "",
            vector=raw.get("vector") or "",
            exploitability=(
                Exploitability.from_api(exploitability) if isinstance(exploitability, dict) else None
            ),
        )


@dataclass
class License:
    """Component license and its risk rating."""

    license_id: str
    risk_rating: int | None = None


@dataclass
class ScaDetail(FindingDetail):
    """Vulnerable third-party component."""

    component_id: str = ""
    component_filename: str = ""
    version: str = ""
    language: str = ""
    component_path: list[str] = field(default_factory=list)
    metadata: str = ""
    licenses: list[License] = field(default_factory=list)
    cve: Cve | None = None

    @property
    def exploit_observed(self) -> bool:
        return bool(self.cve and self.cve.exploitability and self.cve.exploitability.exploit_observed)

    @property
    def cvss(self) -> float | None:
        return self.cve.cvss if self.cve else None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ScaDetail":
        metadata = raw.get("metadata") or ""
        if isinstance(metadata, dict):
            metadata = " ".join(str(v) for v in metadata.values())
        cve = raw.get("cve")
        return cls(
            **cls._common(raw),
            component_id=raw.get("component_id") or "",
            component_filename=raw.get("component_filename") or "",
            version=raw.get("version") or "",
            language=raw.get("language") or "",
            component_path=[
                p.get("path", "") if isinstance(p, dict) else str(p)
                for p in raw.get("component_path") or []
            ],
            metadata=str(metadata),
            licenses=[
                License(
                    license_id=str(lic.get("license_id", "")),
                    risk_rating=_as_int(lic.get("risk_rating")),
                )
                for lic in raw.get("licenses") or []
                if isinstance(lic, dict)
            ],
            cve=Cve.from_api(cve) if isinstance(cve, dict) else None,
        )


DETAIL_TYPES: dict[ScanType, type[FindingDetail]] = {
    ScanType.STATIC: StaticDetail,
    ScanType.DYNAMIC: DynamicDetail,
    ScanType.MANUAL: ManualDetail,
    ScanType.SCA: ScaDetail,
}


def parse_scan_type(value: Any) -> ScanType | None:
    """Return the ScanType for a backend label, or None if it is not one of ours."""
    try:
        return ScanType(str(value).upper())
    except ValueError:
        return None


def parse_detail(scan_type: ScanType | None, raw: dict[str, Any] | None) -> FindingDetail:
    """Build the detail variant that matches scan_type."""
    detail_cls = DETAIL_TYPES.get(scan_type, FindingDetail) if scan_type else FindingDetail
    return detail_cls.from_api(raw or {})


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


@dataclass
class FindingStatus:
    """Lifecycle state of a finding, as reported by the backend."""

    status: str = ""
    resolution: str = ""
    resolution_status: str = ""
    new: bool = False
    first_found_date: str = ""
    last_seen_date: str = ""
    mitigation_review_status: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "FindingStatus":
        return cls(
            status=raw.get("status") or "",
            resolution=raw.get("resolution") or "",
            resolution_status=raw.get("resolution_status") or "",
            new=raw.get("new") is True,
            first_found_date=raw.get("first_found_date") or "",
            last_seen_date=raw.get("last_seen_date") or "",
            mitigation_review_status=raw.get("mitigation_review_status") or "",
        )


@dataclass
class Finding:
    """One reported issue instance."""

    scan_type: ScanType | None
    scan_type_label: str
    detail: FindingDetail
    issue_id: int | str | None = None
    description: str = ""
    violates_policy: bool = False
    status: FindingStatus = field(default_factory=FindingStatus)
    count: int | None = None
    context_type: str = ""
    context_guid: str = ""
    build_id: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def severity(self) -> int:
        return self.detail.severity

    @property
    def resolution(self) -> str:
        return self.status.resolution

    @property
    def is_new(self) -> bool:
        return self.status.new

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Finding":
        """Parse one element of the findings ``_embedded.findings`` array."""
        label = raw.get("scan_type") or "Unknown"
        scan_type = parse_scan_type(label)
        return cls(
            scan_type=scan_type,
            scan_type_label=scan_type.value if scan_type else str(label),
            detail=parse_detail(scan_type, raw.get("finding_details")),
            issue_id=raw.get("issue_id"),
            description=raw.get("description") or "",
            violates_policy=raw.get("violates_policy") is True,
            status=FindingStatus.from_api(raw.get("finding_status") or {}),
            count=_as_int(raw.get("count")),
            context_type=raw.get("context_type") or "",
            context_guid=raw.get("context_guid") or "",
            build_id=_as_int(raw.get("build_id")),
            raw=raw,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the backend document this finding was parsed from."""
        return dict(self.raw)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _check_range(name: str, value: Any, low: float, high: float, cast: type) -> Any:
    if value is None:
        return None
    try:
        number = cast(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number between {low} and {high}") from exc
    if cast is int and float(value) != number:
        raise ValueError(f"{name} must be a whole number, got {value}")
    if not low <= number <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")
    return number


def _check_choice(name: str, value: Any, choices: tuple[str, ...]) -> str | None:
    if value is None:
        return None
    text = str(value).upper()
    if text not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value}")
    return text


def _parse_cwe_list(value: Any) -> list[int]:
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    cwes: list[int] = []
    for item in items:
        text = str(item).upper().removeprefix("CWE-").strip()
        if not text.isdigit():
            raise ValueError(f"Invalid CWE id: {item}")
        cwes.append(int(text))
    return cwes


def _only_flag(value: Any) -> bool | None:
    """Map an "only X" switch to a filter value: false means unfiltered."""
    return True if value is True or str(value).lower() == "true" else None


@dataclass
class FilterSet:
    """Query filters for the findings endpoint. None means "do not filter"."""

    scan_type: ScanType | None = None
    severity: int | None = None
    severity_gte: int | None = None
    cwe: list[int] = field(default_factory=list)
    cvss: float | None = None
    cvss_gte: float | None = None
    cve: str | None = None
    context: str | None = None
    include_annotations: bool | None = None
    include_expiration_date: bool | None = None
    new_only: bool | None = None
    violates_policy: bool | None = None
    sca_dependency_mode: str | None = None
    sca_scan_mode: str | None = None

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "FilterSet":
        """Build filters from tool arguments, validating enums and ranges.

        Raises:
            ValueError: if an argument is out of range or not a known value
        """
        scan_type = params.get("scan_type")
        parsed_type = None
        if scan_type:
            parsed_type = parse_scan_type(scan_type)
            if parsed_type is None:
                raise ValueError(
                    f"scan_type must be one of {', '.join(t.value for t in ScanType)}, got {scan_type}"
                )
        return cls(
            scan_type=parsed_type,
            severity=_check_range("severity", params.get("severity"), 0, 5, int),
            severity_gte=_check_range("severity_gte", params.get("severity_gte"), 0, 5, int),
            cwe=_parse_cwe_list(params.get("cwe", params.get("cwe_ids"))),
            cvss=_check_range("cvss", params.get("cvss"), 0, 10, float),
            cvss_gte=_check_range("cvss_gte", params.get("cvss_gte"), 0, 10, float),
            cve=params.get("cve") or None,
            context=params.get("context") or None,
            include_annotations=_only_flag(params.get("include_annotations")),
            include_expiration_date=_only_flag(params.get("include_expiration_date")),
            new_only=_only_flag(params.get("new_findings_only")),
            violates_policy=_only_flag(params.get("policy_violations_only")),
            sca_dependency_mode=_check_choice(
                "sca_dependency_mode", params.get("sca_dependency_mode"), SCA_DEPENDENCY_MODES
            ),
            sca_scan_mode=_check_choice("sca_scan_mode", params.get("sca_scan_mode"), SCA_SCAN_MODES),
        )

    def to_params(self) -> list[tuple[str, str]]:
        """Serialize present filters as query pairs. Absent filters are omitted."""

        def fmt(value: Any) -> str:
            if isinstance(value, bool):
                return "true" if value else "false"
            if isinstance(value, float) and value.is_integer():
                return str(int(value))
            return str(value)

        pairs: list[tuple[str, str]] = []
        scalars = (
            ("scan_type", self.scan_type.value if self.scan_type else None),
            ("severity", self.severity),
            ("severity_gte", self.severity_gte),
            ("cvss", self.cvss),
            ("cvss_gte", self.cvss_gte),
            ("cve", self.cve),
            ("context", self.context),
            ("include_annot", self.include_annotations),
            ("include_exp_date", self.include_expiration_date),
            ("new", self.new_only),
            ("violates_policy", self.violates_policy),
            ("sca_dep_mode", self.sca_dependency_mode),
            ("sca_scan_mode", self.sca_scan_mode),
        )
        for key, value in scalars:
            if value is not None:
                pairs.append((key, fmt(value)))
        pairs.extend(("cwe", str(cwe)) for cwe in self.cwe)
        return pairs

    def describe(self) -> dict[str, Any]:
        """Human-readable summary of the applied filters."""
        if self.severity is not None:
            severity = f"exact: {self.severity}"
        elif self.severity_gte is not None:
            severity = f">= {self.severity_gte}"
        else:
            severity = "all"
        if self.cvss is not None:
            cvss = f"exact: {self.cvss}"
        elif self.cvss_gte is not None:
            cvss = f">= {self.cvss_gte}"
        else:
            cvss = "all"
        return {
            "scan_type": self.scan_type.value if self.scan_type else "all",
            "severity_filter": severity,
            "cvss_filter": cvss,
            "cwe_filter": ", ".join(str(c) for c in self.cwe) if self.cwe else "all",
            "cve": self.cve or "all",
            "context": self.context or "policy",
            "new_findings_only": bool(self.new_only),
            "policy_violations_only": bool(self.violates_policy),
        }


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


@dataclass
class Page:
    """One page of findings plus the backend's totals for the current filters."""

    items: list[Finding]
    page_index: int
    page_size: int
    total_pages: int
    total_elements: int
    scan_type_unavailable: bool = False
    available_scan_types: list[str] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @classmethod
    def empty(cls, page_size: int, available_scan_types: list[str] | None = None) -> "Page":
        """Well-formed empty page for an application without matching scans.

        Always page 0, whatever page was requested.
        """
        return cls(
            items=[],
            page_index=0,
            page_size=page_size,
            total_pages=0,
            total_elements=0,
            scan_type_unavailable=True,
            available_scan_types=list(available_scan_types or []),
        )

    def pagination_dict(self) -> dict[str, Any]:
        return {
            "current_page": self.page_index,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "total_elements": self.total_elements,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }


@dataclass
class AggregateResult:
    """Findings collected across pages by one aggregation call."""

    items: list[Finding]
    pages_retrieved: int
    total_pages: int
    total_elements: int
    truncated: bool
    page_size: int
    max_pages: int
    scan_type_unavailable: bool = False
    available_scan_types: list[str] = field(default_factory=list)
