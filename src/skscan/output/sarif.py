"""SARIF v2.1.0 reporter: GitHub code scanning upload."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from skscan.findings.models import Finding, ScanResult
from skscan.rules.builtin import ALL_BUILTIN_RULES
from skscan.rules.models import Rule

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"
INFORMATION_URI = "https://github.com/skscan/skscan"

_SEVERITY_MAP = {
    "critical": "error",
    "high": "error",
    "medium": "warning",
    "low": "note",
}


def _security_severity(severity: str) -> str:
    """Map severity to SARIF security-severity score (0.0 to 10.0)."""
    mapping = {
        "critical": "9.5",
        "high": "7.5",
        "medium": "5.0",
        "low": "2.0",
    }
    return mapping.get(severity, "5.0")


def rule_descriptor(rule: Rule) -> Dict[str, Any]:
    return {
        "id": rule.id,
        "name": rule.name,
        "shortDescription": {"text": rule.description},
        "defaultConfiguration": {"level": _SEVERITY_MAP.get(rule.severity, "warning")},
        "properties": {
            "tags": ["security", rule.category],
            "security-severity": _security_severity(rule.severity),
        },
    }


def rule_descriptors(
    findings: Iterable[Finding] = (),
    extra_rules: Optional[Iterable[Rule]] = None,
) -> List[Dict[str, Any]]:
    """Static descriptor table for the built-in catalog, plus any other rule ids seen."""
    rules: List[Dict[str, Any]] = [rule_descriptor(r) for r in ALL_BUILTIN_RULES]
    known = {r.id for r in ALL_BUILTIN_RULES}
    for rule in extra_rules or ():
        if rule.id not in known:
            known.add(rule.id)
            rules.append(rule_descriptor(rule))
    for f in findings:
        if f.rule_id not in known:
            known.add(f.rule_id)
            rules.append({
                "id": f.rule_id,
                "shortDescription": {"text": f.message},
                "defaultConfiguration": {"level": _SEVERITY_MAP.get(f.severity, "warning")},
            })
    return rules


def finding_to_result(f: Finding) -> Dict[str, Any]:
    region: Dict[str, Any] = {"startLine": max(f.line, 1)}
    if f.column is not None:
        region["startColumn"] = f.column
    return {
        "ruleId": f.rule_id,
        "level": _SEVERITY_MAP.get(f.severity, "warning"),
        "message": {"text": f.message},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {"uri": f.file},
                    "region": region,
                }
            }
        ],
    }


def to_dict(result: ScanResult, *, extra_rules: Optional[Iterable[Rule]] = None) -> Dict[str, Any]:
    """Convert ScanResult to a SARIF v2.1.0 dict."""
    return {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "skscan",
                        "version": result.engine_version,
                        "informationUri": INFORMATION_URI,
                        "rules": rule_descriptors(result.findings, extra_rules),
                    }
                },
                "results": [finding_to_result(f) for f in result.findings],
            }
        ],
    }


def render(result: ScanResult, *, extra_rules: Optional[Iterable[Rule]] = None) -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(result, extra_rules=extra_rules), indent=2, ensure_ascii=False)
