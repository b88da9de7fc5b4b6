"""Rule registry: built-in catalog plus custom YAML rules from .skscan-rules/."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from skscan.config.schema import CATEGORIES, LEGACY_CATEGORIES, SEVERITIES
from skscan.rules.models import CODE_EXTENSIONS, Rule

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIR = ".skscan-rules"

# Fallback legacy grouping for rule ids the registry does not know.
_GROUP_BY_PREFIX = {
    "secrets": "secrets",
    "dangerous-code": "dangerous-code",
    "network": "dangerous-code",
    "prompt-override": "prompt-override",
    "ai": "prompt-override",
    "exfiltration": "exfiltration",
    "hidden-instructions": "hidden-instructions",
    "obfuscation": "hidden-instructions",
    "homoglyph": "hidden-instructions",
}


class RuleLoadError(Exception):
    """Raised when a custom rule file is malformed."""


class RuleRegistry:
    """Central store for all detection rules."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}
        self._custom: List[str] = []

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    @property
    def custom_rules(self) -> List[Rule]:
        return [self._rules[rule_id] for rule_id in self._custom]

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def group_of(self, rule_id: str) -> str:
        """Legacy five-way group of *rule_id*."""
        rule = self._rules.get(rule_id)
        if rule is not None:
            return rule.group
        return _GROUP_BY_PREFIX.get(rule_id.split("/", 1)[0], "dangerous-code")

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        if count:
            logger.info("Loaded %d custom rule(s) from %s", count, directory)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleLoadError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for index, entry in enumerate(data):
            rule = _rule_from_entry(entry, f"{path}[{index}]")
            if rule.id in self._rules and rule.id not in self._custom:
                raise RuleLoadError(f"{path}: custom rule id {rule.id!r} shadows a built-in rule")
            self.register(rule)
            if rule.id not in self._custom:
                self._custom.append(rule.id)
            count += 1
        return count


def _rule_from_entry(entry: object, where: str) -> Rule:
    if not isinstance(entry, dict):
        raise RuleLoadError(f"{where}: rule must be a mapping")
    for key in ("id", "pattern"):
        if not isinstance(entry.get(key), str) or not entry[key]:
            raise RuleLoadError(f"{where}: missing required string field {key!r}")

    severity = entry.get("severity", "medium")
    category = entry.get("category", "permissions")
    group = entry.get("group", "dangerous-code")
    if severity not in SEVERITIES:
        raise RuleLoadError(f"{where}: invalid severity {severity!r}")
    if category not in CATEGORIES:
        raise RuleLoadError(f"{where}: invalid category {category!r}")
    if group not in LEGACY_CATEGORIES:
        raise RuleLoadError(f"{where}: invalid group {group!r}")

    extensions = entry.get("extensions")
    if extensions is None:
        ext_set = CODE_EXTENSIONS
    elif isinstance(extensions, list) and all(isinstance(e, str) for e in extensions):
        ext_set = frozenset(e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions)
    else:
        raise RuleLoadError(f"{where}: extensions must be a list of suffixes")

    rule = Rule(
        id=entry["id"],
        name=entry.get("name", entry["id"]),
        description=entry.get("message", entry.get("description", entry["id"])),
        category=category,
        group=group,
        severity=severity,
        pattern=entry["pattern"],
        flags=re.IGNORECASE if entry.get("ignore_case") else 0,
        extensions=ext_set,
    )
    try:
        _ = rule.compiled_pattern
    except re.error as exc:
        raise RuleLoadError(f"{where}: invalid pattern for {rule.id}: {exc}") from exc
    return rule


def build_registry(root: Optional[Path] = None) -> RuleRegistry:
    """Create a registry holding the built-in catalog and any custom rules under *root*."""
    from skscan.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)

    if root is not None:
        base = root if root.is_dir() else root.parent
        registry.load_custom_rules(base / CUSTOM_RULES_DIR)

    # Force-compile patterns now (not inside the hot loop)
    for rule in registry.all_rules:
        _ = rule.compiled_pattern

    return registry
