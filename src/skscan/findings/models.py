"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from skscan.config.schema import Category, ScanStatus, Severity


@dataclass(frozen=True)
class Finding:
    """One detected issue from a single rule match at a specific file/line."""

    rule_id: str
    severity: Severity
    category: Category
    file: str
    line: int  # 1-based
    message: str
    snippet: str
    column: Optional[int] = None  # 1-based; None when not computed

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "ruleId": self.rule_id,
            "severity": self.severity,
            "category": self.category,
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "snippet": self.snippet,
        }
        if self.column is not None:
            data["column"] = self.column
        return data


@dataclass(frozen=True)
class Summary:
    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
        }


@dataclass
class ScanResult:
    """Complete result of one scan. Created fresh on every call."""

    status: ScanStatus = "pass"
    summary: Summary = field(default_factory=Summary)
    findings: List[Finding] = field(default_factory=list)
    categories: Dict[str, ScanStatus] = field(default_factory=dict)
    scanned_files: int = 0
    scan_duration: float = 0.0  # milliseconds
    engine_version: str = ""

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable dict using the wire field names."""
        return {
            "status": self.status,
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
            "categories": dict(self.categories),
            "scannedFiles": self.scanned_files,
            "scanDuration": self.scan_duration,
            "engineVersion": self.engine_version,
        }
