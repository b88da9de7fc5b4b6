"""Core scan engine: ignore filtering, rule sets, then aggregation.

``scan_skill`` is a pure function of its inputs apart from the measured
duration: no I/O, no shared mutable state, safe to call concurrently.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence

from skscan import ENGINE_VERSION
from skscan.config.schema import ScanConfig
from skscan.findings.aggregator import aggregate
from skscan.findings.models import Finding, ScanResult
from skscan.scanner.files import SkillFile
from skscan.scanner.globs import matches_any
from skscan.scanner.scanners import DEFAULT_SCANNERS, CategoryScanner

logger = logging.getLogger(__name__)


def filter_ignored(files: Sequence[SkillFile], ignore: Sequence[str]) -> List[SkillFile]:
    if not ignore:
        return list(files)
    return [f for f in files if not matches_any(f.path, ignore)]


def scan_skill(
    files: Sequence[SkillFile],
    config: Optional[ScanConfig] = None,
    *,
    scanners: Optional[Sequence[CategoryScanner]] = None,
) -> ScanResult:
    """Scan *files* and return the aggregated ScanResult."""
    start = time.perf_counter()
    cfg = config or ScanConfig()
    active = DEFAULT_SCANNERS if scanners is None else scanners

    kept = filter_ignored(files, cfg.ignore)

    raw: List[Finding] = []
    for scanner in active:
        raw.extend(scanner.scan(kept))

    result = aggregate(raw, cfg, scanned_files=len(kept), engine_version=ENGINE_VERSION)
    result.scan_duration = round((time.perf_counter() - start) * 1000, 2)
    logger.debug(
        "Scanned %d/%d file(s): %d raw finding(s), %d after overrides, status=%s",
        len(kept), len(files), len(raw), result.summary.total, result.status,
    )
    return result
