"""Finding aggregation: config overrides, ordering, summary counts and statuses."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from skscan.config.schema import (
    CATEGORIES,
    LEGACY_CATEGORIES,
    SEVERITY_RANK,
    ScanConfig,
    ScanStatus,
    is_blocking,
)
from skscan.findings.models import Finding, ScanResult, Summary

logger = logging.getLogger(__name__)

_STATUS_RANK: dict[str, int] = {"pass": 0, "warn": 1, "fail": 2}


def apply_overrides(findings: Iterable[Finding], rules: Mapping[str, str]) -> List[Finding]:
    """Apply per-rule actions.

    ``"off"`` drops the finding, ``"warn"`` yields a copy at ``medium``
    severity. ``"error"``, absent ids and unknown ids leave findings untouched.
    """
    out: List[Finding] = []
    for f in findings:
        action = rules.get(f.rule_id)
        if action == "off":
            continue
        if action == "warn" and f.severity != "medium":
            f = dataclasses.replace(f, severity="medium")
        out.append(f)
    return out


def sort_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Order by severity rank, then file path, then line. Stable."""
    return sorted(
        findings,
        key=lambda f: (SEVERITY_RANK.get(f.severity, len(SEVERITY_RANK)), f.file, f.line),
    )


def summarize(findings: List[Finding]) -> Summary:
    counts = {sev: 0 for sev in SEVERITY_RANK}
    for f in findings:
        counts[f.severity] = counts.get(f.severity, 0) + 1
    return Summary(
        total=len(findings),
        critical=counts["critical"],
        high=counts["high"],
        medium=counts["medium"],
        low=counts["low"],
    )


def status_for(findings: Iterable[Finding]) -> ScanStatus:
    """fail on any critical/high, warn on any other finding, else pass."""
    status: ScanStatus = "pass"
    for f in findings:
        if is_blocking(f.severity):
            return "fail"
        status = "warn"
    return status


def worst_status(statuses: Iterable[str]) -> ScanStatus:
    worst: ScanStatus = "pass"
    for s in statuses:
        if _STATUS_RANK.get(s, 0) > _STATUS_RANK[worst]:
            worst = s  # type: ignore[assignment]
    return worst


def category_statuses(findings: List[Finding]) -> Dict[str, ScanStatus]:
    """Status for each canonical category, every key present, in taxonomy order."""
    return {
        cat: status_for(f for f in findings if f.category == cat)
        for cat in CATEGORIES
    }


def legacy_category_statuses(findings: List[Finding], registry=None) -> Dict[str, ScanStatus]:
    """Derived five-way view (secrets / dangerous-code / prompt-override / ...)."""
    if registry is None:
        from skscan.rules.registry import build_registry

        registry = build_registry()
    by_group: Dict[str, List[Finding]] = {group: [] for group in LEGACY_CATEGORIES}
    for f in findings:
        by_group.setdefault(registry.group_of(f.rule_id), []).append(f)
    return {group: status_for(items) for group, items in by_group.items()}


def aggregate(
    findings: Iterable[Finding],
    config: Optional[ScanConfig] = None,
    *,
    scanned_files: int,
    engine_version: str,
    scan_duration: float = 0.0,
) -> ScanResult:
    """Overrides, sort, summary and statuses in one pass."""
    rules = config.rules if config is not None else {}
    ordered = sort_findings(apply_overrides(findings, rules))
    categories = category_statuses(ordered)
    return ScanResult(
        status=worst_status(categories.values()),
        summary=summarize(ordered),
        findings=ordered,
        categories=categories,
        scanned_files=scanned_files,
        scan_duration=scan_duration,
        engine_version=engine_version,
    )


def merge_findings(
    result: ScanResult,
    extra: Iterable[Finding],
    config: Optional[ScanConfig] = None,
    paths: Optional[Iterable[str]] = None,
) -> ScanResult:
    """Fold findings from a secondary phase (e.g. AI review) into *result*.

    When *paths* (the scanned file paths) is given, extra findings pointing at
    any other file are dropped with a warning.
    """
    extra = list(extra)
    if paths is not None:
        known = set(paths)
        kept = [f for f in extra if f.file in known]
        for f in extra:
            if f.file not in known:
                logger.warning("Dropping %s finding for unscanned file %r", f.rule_id, f.file)
        extra = kept
    return aggregate(
        [*result.findings, *extra],
        config,
        scanned_files=result.scanned_files,
        engine_version=result.engine_version,
        scan_duration=result.scan_duration,
    )
