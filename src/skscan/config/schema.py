"""Taxonomy and configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal

Severity = Literal["critical", "high", "medium", "low"]
Category = Literal["secrets", "permissions", "network", "filesystem"]
LegacyCategory = Literal[
    "secrets",
    "dangerous-code",
    "prompt-override",
    "exfiltration",
    "hidden-instructions",
]
ScanStatus = Literal["pass", "warn", "fail"]
RuleAction = Literal["off", "warn", "error"]

# Lower rank sorts first.
SEVERITY_RANK: dict[str, int] = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
}

SEVERITIES: tuple[str, ...] = ("critical", "high", "medium", "low")

CATEGORIES: tuple[str, ...] = ("secrets", "permissions", "network", "filesystem")

LEGACY_CATEGORIES: tuple[str, ...] = (
    "secrets",
    "dangerous-code",
    "prompt-override",
    "exfiltration",
    "hidden-instructions",
)

RULE_ACTIONS: tuple[str, ...] = ("off", "warn", "error")

OUTPUT_FORMATS: tuple[str, ...] = ("pretty", "json", "sarif")


def is_blocking(severity: str) -> bool:
    """Return True for severities that fail a category (critical / high)."""
    return SEVERITY_RANK.get(severity, len(SEVERITY_RANK)) <= SEVERITY_RANK["high"]


@dataclass
class ScanConfig:
    """Per-scan overrides handed to the engine. Read-only during a scan."""

    rules: Dict[str, RuleAction] = field(default_factory=dict)
    ignore: List[str] = field(default_factory=list)


# ---- .skscan.toml sections ----


@dataclass
class ScanSettings:
    strict: bool = False  # any finding fails the run
    max_file_size_kb: int = 512


@dataclass
class OutputConfig:
    format: Literal["pretty", "json", "sarif"] = "pretty"
    show_snippets: bool = True


@dataclass
class IgnoreConfig:
    paths: List[str] = field(default_factory=list)


@dataclass
class CIConfig:
    annotations: bool = True
    step_summary: bool = True


@dataclass
class SkscanConfig:
    version: str = "1.0"
    scan: ScanSettings = field(default_factory=ScanSettings)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: Dict[str, RuleAction] = field(default_factory=dict)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    def to_scan_config(self) -> ScanConfig:
        return ScanConfig(rules=dict(self.rules), ignore=list(self.ignore.paths))
