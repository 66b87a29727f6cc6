"""Breakdowns, counts and risk classification over a set of findings.

All functions are pure: they take findings, return fresh structures, and
never fail on empty input.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from .models import Finding, ScaDetail

SEVERITY_LABELS: dict[int, str] = {
    5: "Very High",
    4: "High",
    3: "Medium",
    2: "Low",
    1: "Very Low",
    0: "Informational",
}
UNKNOWN_SEVERITY_LABEL = "Unknown"

HIGH_RISK_SEVERITY = 4
# More high-risk components than this (with nothing exploitable) is MEDIUM risk
MEDIUM_RISK_COMPONENT_THRESHOLD = 5
LICENSE_RISK_THRESHOLD = 2
TOP_VULNERABILITIES_LIMIT = 10

COMPLIANCE_STATUS_MAP = {
    "PASSED": "PASS",
    "DID_NOT_PASS": "FAIL",
    "CONDITIONAL_PASS": "CONDITIONAL_PASS",
}


def severity_label(severity: int | None) -> str:
    """Label for a 0-5 severity; anything else is "Unknown"."""
    if severity is None:
        return UNKNOWN_SEVERITY_LABEL
    return SEVERITY_LABELS.get(severity, UNKNOWN_SEVERITY_LABEL)


def severity_breakdown(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per severity label. All six labels are always present."""
    breakdown = {label: 0 for label in SEVERITY_LABELS.values()}
    for finding in findings:
        label = severity_label(finding.severity)
        breakdown[label] = breakdown.get(label, 0) + 1
    return breakdown


def severity_counts_by_level(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per numeric severity 1-5 (keys are strings)."""
    counts = {str(level): 0 for level in range(5, 0, -1)}
    for finding in findings:
        key = str(finding.severity)
        if key in counts:
            counts[key] += 1
    return counts


def scan_type_breakdown(findings: Iterable[Finding]) -> dict[str, int]:
    return dict(Counter(f.scan_type_label for f in findings))


def status_breakdown(findings: Iterable[Finding]) -> dict[str, int]:
    return dict(Counter(f.status.status or "Unknown" for f in findings))


def cwe_breakdown(findings: Iterable[Finding]) -> dict[str, int]:
    return dict(
        Counter(str(f.detail.cwe_id) if f.detail.cwe_id is not None else "Unknown" for f in findings)
    )


def _sca(finding: Finding) -> ScaDetail | None:
    return finding.detail if isinstance(finding.detail, ScaDetail) else None


def is_exploitable(finding: Finding) -> bool:
    """True only for SCA findings whose CVE has an observed exploit."""
    detail = _sca(finding)
    return detail is not None and detail.exploit_observed


def count_exploitable(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if is_exploitable(f))


def count_high_risk(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if f.severity >= HIGH_RISK_SEVERITY)


def count_policy_violations(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if f.violates_policy)


def has_license_risk(finding: Finding) -> bool:
    detail = _sca(finding)
    if detail is None:
        return False
    return any(
        lic.risk_rating is not None and lic.risk_rating > LICENSE_RISK_THRESHOLD
        for lic in detail.licenses
    )


def count_license_risk(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if has_license_risk(f))


def count_dependencies(findings: Iterable[Finding], kind: str) -> int:
    """Count SCA findings whose dependency metadata mentions kind (DIRECT/TRANSITIVE)."""
    return sum(1 for f in findings if (d := _sca(f)) is not None and kind in d.metadata)


def unique_components(findings: Iterable[Finding]) -> int:
    return len({d.component_id for f in findings if (d := _sca(f)) is not None and d.component_id})


def top_vulnerabilities(
    findings: Iterable[Finding], limit: int = TOP_VULNERABILITIES_LIMIT
) -> list[dict[str, Any]]:
    """Highest-CVSS SCA findings: drop those without a CVSS, sort descending, keep ``limit``."""
    scored = [
        (f, d) for f in findings if (d := _sca(f)) is not None and d.cve is not None and d.cve.cvss
    ]
    scored = sorted(scored, key=lambda pair: pair[1].cve.cvss, reverse=True)[:limit]
    return [
        {
            "cve": d.cve.name,
            "cvss": d.cve.cvss,
            "severity": d.cve.severity,
            "component": d.component_filename,
            "component_path": d.component_path,
            "exploitable": d.exploit_observed,
            "issue_id": f.issue_id,
        }
        for f, d in scored
    ]


def classify_risk(exploitable: int, high_risk: int) -> str:
    """HIGH if anything is exploitable, MEDIUM above five high-risk components, else LOW."""
    if exploitable > 0:
        return "HIGH"
    if high_risk > MEDIUM_RISK_COMPONENT_THRESHOLD:
        return "MEDIUM"
    return "LOW"


def classify_app_risk(high_risk: int, policy_violations: int) -> str:
    """Per-application risk used when ranking applications."""
    if high_risk > 0 and policy_violations > 0:
        return "HIGH"
    if high_risk > 0 or policy_violations > 0:
        return "MEDIUM"
    return "LOW"


def risk_assessment(
    exploitable: int, high_risk: int, top: Sequence[dict[str, Any]]
) -> dict[str, Any]:
    """Overall risk plus CVSS bands over the top-vulnerabilities list."""
    critical = sum(1 for v in top if v["cvss"] >= 9.0)
    return {
        "overall_risk": classify_risk(exploitable, high_risk),
        "critical_components": critical,
        "high_components": sum(1 for v in top if 7.0 <= v["cvss"] < 9.0),
        "medium_components": sum(1 for v in top if 4.0 <= v["cvss"] < 7.0),
        "needs_immediate_attention": exploitable > 0 or critical > 0,
    }


def compliance_status(policy_status: str | None, open_violations: int) -> str:
    """Map a backend policy status to PASS/FAIL/CONDITIONAL_PASS."""
    if policy_status in COMPLIANCE_STATUS_MAP:
        return COMPLIANCE_STATUS_MAP[policy_status]
    return "PASS" if open_violations == 0 else "FAIL"


@dataclass
class FindingsAnalysis:
    """Common figures for one set of findings."""

    total_findings: int = 0
    exploitable_findings: int = 0
    high_risk_components: int = 0
    policy_violations: int = 0
    risk_level: str = "LOW"
    severity_breakdown: dict[str, int] = field(default_factory=dict)
    scan_type_breakdown: dict[str, int] = field(default_factory=dict)
    status_breakdown: dict[str, int] = field(default_factory=dict)
    cwe_breakdown: dict[str, int] = field(default_factory=dict)
    top_vulnerabilities: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def analyze(findings: Sequence[Finding]) -> FindingsAnalysis:
    """Figures shared by the findings and SCA tools."""
    exploitable = count_exploitable(findings)
    high_risk = count_high_risk(findings)
    return FindingsAnalysis(
        total_findings=len(findings),
        exploitable_findings=exploitable,
        high_risk_components=high_risk,
        policy_violations=count_policy_violations(findings),
        risk_level=classify_risk(exploitable, high_risk),
        severity_breakdown=severity_breakdown(findings),
        scan_type_breakdown=scan_type_breakdown(findings),
        status_breakdown=status_breakdown(findings),
        cwe_breakdown=cwe_breakdown(findings),
        top_vulnerabilities=top_vulnerabilities(findings),
    )
