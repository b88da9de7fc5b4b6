"""Load and merge configuration from .skscan.toml and SKSCAN_* env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from skscan.config.schema import (
    OUTPUT_FORMATS,
    RULE_ACTIONS,
    CIConfig,
    IgnoreConfig,
    OutputConfig,
    RuleAction,
    ScanSettings,
    SkscanConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".skscan.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    base = root if root.is_dir() else root.parent
    candidate = base / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _build_rules(data: Dict[str, Any]) -> Dict[str, RuleAction]:
    raw = data.get("rules", {})
    if not isinstance(raw, dict):
        raise ConfigError("[rules] must be a table of rule id = action")
    rules: Dict[str, RuleAction] = {}
    for rule_id, action in raw.items():
        if action not in RULE_ACTIONS:
            logger.warning(
                "Unknown action %r for rule %s (expected off | warn | error); ignoring",
                action, rule_id,
            )
            continue
        rules[rule_id] = action
    return rules


def _clean_globs(globs: List[Any]) -> List[str]:
    clean: List[str] = []
    for g in globs:
        if isinstance(g, str) and g:
            clean.append(g)
        else:
            logger.warning("Dropping invalid ignore pattern %r", g)
    return clean


def _merge_env_overrides(cfg: SkscanConfig) -> None:
    """Apply SKSCAN_* environment variable overrides."""
    if val := os.environ.get("SKSCAN_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring SKSCAN_FORMAT=%r", val)
    if val := os.environ.get("SKSCAN_STRICT"):
        cfg.scan.strict = val.lower() in ("1", "true", "yes")
    if val := os.environ.get("SKSCAN_DISABLE_RULES"):
        for rule_id in (r.strip() for r in val.split(",")):
            if rule_id:
                cfg.rules[rule_id] = "off"
    if val := os.environ.get("SKSCAN_IGNORE_PATHS"):
        sep = ":" if os.name != "nt" else ";"
        cfg.ignore.paths.extend(p.strip() for p in val.split(sep) if p.strip())


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> SkscanConfig:
    """Load, validate, and return a SkscanConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = SkscanConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        try:
            cfg = SkscanConfig(
                version=str(raw.get("version", "1.0")),
                scan=_build_section(raw, ScanSettings, "scan"),
                output=_build_section(raw, OutputConfig, "output"),
                rules=_build_rules(raw),
                ignore=_build_section(raw, IgnoreConfig, "ignore"),
                ci=_build_section(raw, CIConfig, "ci"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format: {cfg.output.format}")
        if not isinstance(cfg.ignore.paths, list):
            raise ConfigError("[ignore] paths must be a list of globs")
        cfg.ignore.paths = _clean_globs(cfg.ignore.paths)

    _merge_env_overrides(cfg)
    return cfg
