"""GitHub Actions workflow annotations and job step summary."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping, Optional

from skscan.config.schema import is_blocking
from skscan.findings.models import Finding, ScanResult


def in_github_actions(env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    return bool(env.get("GITHUB_ACTIONS"))


def format_annotation(f: Finding) -> str:
    level = "error" if is_blocking(f.severity) else "warning"
    return f"::{level} file={f.file},line={f.line}::{f.rule_id}: {f.message}"


def annotations(result: ScanResult) -> List[str]:
    """One workflow command per finding, in result order."""
    return [format_annotation(f) for f in result.findings]


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def step_summary(result: ScanResult) -> str:
    """Markdown block for ``$GITHUB_STEP_SUMMARY``."""
    lines = [
        "## skscan Results\n",
        f"**Status:** {result.status.upper()} | **Files scanned:** {result.scanned_files}"
        f" | **Findings:** {result.total_findings}\n",
    ]
    if result.findings:
        lines.append("| Severity | Rule | File | Line | Message |")
        lines.append("|----------|------|------|------|---------|")
        for f in result.findings:
            lines.append(
                f"| {f.severity} | `{f.rule_id}` | `{f.file}` | {f.line} | {_cell(f.message)} |"
            )
    else:
        lines.append("No issues found.")
    lines.append("")
    return "\n".join(lines)


def write_step_summary(result: ScanResult, env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Append the summary to ``$GITHUB_STEP_SUMMARY`` when set. Returns the path written."""
    env = os.environ if env is None else env
    target = env.get("GITHUB_STEP_SUMMARY")
    if not target:
        return None
    path = Path(target)
    with open(path, "a", encoding="utf-8") as f:
        f.write(step_summary(result))
    return path
