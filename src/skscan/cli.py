"""skscan CLI: Typer application with scan, ci, rules, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from skscan import __version__

app = typer.Typer(
    name="skscan",
    help="Static security scanner for AI-agent skill packages.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


def _parse_rule_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [r.strip() for r in value.split(",") if r.strip()]


def _prepare(path: str, config: Optional[str]):
    """Load config, custom rules and files for *path*. Exits 2 on operational errors."""
    from skscan.config.loader import ConfigError, load_config
    from skscan.rules.registry import RuleLoadError, build_registry
    from skscan.scanner.files import DiscoveryError, discover_files

    target = Path(path).resolve()
    try:
        cfg = load_config(target, config)
        registry = build_registry(target)
        files = discover_files(target, cfg.scan.max_file_size_kb)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except RuleLoadError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except DiscoveryError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if not files:
        console.print("[bold red]Error:[/bold red] No scannable files found.")
        raise typer.Exit(code=2)
    return target, cfg, registry, files


def _run(cfg, registry, files):
    from skscan.scanner.engine import scan_skill
    from skscan.scanner.scanners import default_scanners

    return scan_skill(
        files,
        cfg.to_scan_config(),
        scanners=default_scanners(registry.custom_rules),
    )


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    path: str = typer.Argument(".", help="File or directory to scan"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: pretty | json | sarif"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Exit 1 on any finding, not just critical/high"),
    ignore: Optional[str] = typer.Option(None, "--ignore", help="Comma-separated rule IDs to turn off"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .skscan.toml"),
    badge: bool = typer.Option(False, "--badge", help="Print an SVG status badge instead of a report"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Scan a skill directory or file."""
    from skscan.config.schema import OUTPUT_FORMATS
    from skscan.output import json_report, sarif, terminal
    from skscan.output.badge import render_badge

    _configure_logging(verbose, debug)

    if format is not None and format not in OUTPUT_FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    target, cfg, registry, files = _prepare(path, config)

    # --- CLI overrides ---
    if format:
        cfg.output.format = format  # type: ignore[assignment]
    if strict:
        cfg.scan.strict = True
    for rule_id in _parse_rule_list(ignore):
        cfg.rules[rule_id] = "off"

    if verbose or debug:
        console.print(f"[dim]Target: {target}[/dim]")
        console.print(f"[dim]Rules loaded: {len(registry)}[/dim]")
        console.print(f"[dim]Files discovered: {len(files)}[/dim]")

    result = _run(cfg, registry, files)

    if debug:
        console.print(f"[dim]Scan duration: {result.scan_duration:.2f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None

    if badge:
        report_text = render_badge(result.status)
        typer.echo(report_text)
    elif cfg.output.format == "json":
        report_text = json_report.render(result)
        typer.echo(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(result, extra_rules=registry.custom_rules)
        typer.echo(report_text)
    else:
        terminal.render(result, show_snippets=cfg.output.show_snippets, registry=registry)

    # --- Write to file ---
    if output:
        if report_text is None:
            report_text = json_report.render(result)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    # --- Exit code ---
    if badge:
        raise typer.Exit(code=0)
    if result.status == "fail":
        raise typer.Exit(code=1)
    if cfg.scan.strict and result.findings:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── ci ────────────────────────────────────────────────────────────────────────


@app.command()
def ci(
    path: str = typer.Argument(".", help="File or directory to scan"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .skscan.toml"),
) -> None:
    """Strict CI scan: JSON output, GitHub Actions annotations, step summary."""
    from skscan.output import annotations, json_report

    _configure_logging(False, False)
    _, cfg, registry, files = _prepare(path, config)
    result = _run(cfg, registry, files)

    typer.echo(json_report.render(result))

    if cfg.ci.annotations and annotations.in_github_actions():
        for line in annotations.annotations(result):
            typer.echo(line)
    if cfg.ci.step_summary:
        annotations.write_step_summary(result)

    # CI mode is always strict
    raise typer.Exit(code=1 if result.findings else 0)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    path: str = typer.Argument(".", help="Directory whose .skscan-rules/ should be included"),
) -> None:
    """List the rule catalog."""
    from rich.table import Table

    from skscan.rules.registry import RuleLoadError, build_registry

    try:
        registry = build_registry(Path(path).resolve())
    except RuleLoadError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    table = Table(title="skscan rules", title_style="bold", border_style="dim")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Category", style="magenta")
    table.add_column("Description")
    for rule in registry.all_rules:
        table.add_row(rule.id, rule.severity, rule.category, rule.description)
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    path: str = typer.Argument(".", help="Directory to write .skscan.toml into"),
) -> None:
    """Generate a starter .skscan.toml."""
    from skscan.config.defaults import DEFAULT_TOML
    from skscan.config.loader import CONFIG_FILENAME

    config_path = Path(path) / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"skscan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """skscan: Static security scanner for AI-agent skill packages."""
