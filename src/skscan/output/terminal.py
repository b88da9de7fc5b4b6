"""Rich terminal reporter: severity pills, category statuses, verdict."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from skscan.findings.aggregator import legacy_category_statuses
from skscan.findings.models import Finding, ScanResult

_SEVERITY_STYLE = {
    "critical": "bold white on red",
    "high": "bold white on dark_orange",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_STATUS_STYLE = {
    "pass": "bold green",
    "warn": "bold yellow",
    "fail": "bold red",
}

_CATEGORY_LABELS = {
    "secrets": "Secrets",
    "permissions": "Permissions",
    "network": "Network",
    "filesystem": "Filesystem",
}

_GROUP_LABELS = {
    "secrets": "Secrets",
    "dangerous-code": "Dangerous Code",
    "prompt-override": "Prompt Override",
    "exfiltration": "Exfiltration",
    "hidden-instructions": "Hidden Instructions",
}


def _severity_pill(severity: str) -> Text:
    return Text(f" {severity.upper()} ", style=_SEVERITY_STYLE.get(severity, ""))


def _status_badge(status: str) -> Text:
    return Text(status.upper().ljust(5), style=_STATUS_STYLE.get(status, ""))


def _print_finding(console: Console, f: Finding, show_snippets: bool) -> None:
    line = Text("  ")
    line.append_text(_severity_pill(f.severity))
    line.append(" ")
    line.append(f.rule_id, style="dim")
    console.print(line)
    location = Text(f"    {f.file}:{f.line}", style="cyan")
    location.append(f" {f.message}", style="default")
    console.print(location)
    if show_snippets and f.snippet:
        console.print(Text(f"    {f.snippet}", style="dim"))


def render(
    result: ScanResult,
    *,
    console: Optional[Console] = None,
    show_snippets: bool = True,
    registry=None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console()

    console.print()
    console.print(f"  [bold]skscan v{result.engine_version}[/bold]")
    console.print()

    for finding in result.findings:
        _print_finding(console, finding, show_snippets)
    if result.findings:
        console.print()

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Category")
    table.add_column("Status")
    for key, label in _CATEGORY_LABELS.items():
        table.add_row(label, _status_badge(result.categories.get(key, "pass")))
    console.print(table)

    if result.findings:
        groups = legacy_category_statuses(result.findings, registry)
        console.print()
        group_table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        group_table.add_column("Rule group")
        group_table.add_column("Status")
        for key, label in _GROUP_LABELS.items():
            group_table.add_row(label, _status_badge(groups.get(key, "pass")))
        console.print(group_table)

    _print_summary(console, result)


def _print_summary(console: Console, result: ScanResult) -> None:
    summary = result.summary
    parts = []
    if summary.critical:
        parts.append(f"[red]{summary.critical} critical[/red]")
    if summary.high:
        parts.append(f"[red]{summary.high} high[/red]")
    if summary.medium:
        parts.append(f"[yellow]{summary.medium} medium[/yellow]")
    if summary.low:
        parts.append(f"[dim]{summary.low} low[/dim]")
    findings_line = ", ".join(parts) if parts else "[green]no issues found[/green]"

    console.print()
    console.print(f"  [bold]Findings:[/bold] {findings_line}")
    console.print(f"  [bold]Files:[/bold]    {result.scanned_files} scanned")
    console.print(f"  [bold]Duration:[/bold] {result.scan_duration:.0f}ms")
    console.print()
    style = _STATUS_STYLE.get(result.status, "bold")
    console.print(f"  [{style}]Result: {result.status.upper()}[/{style}]")
    console.print()
