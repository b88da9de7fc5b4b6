"""Category scanners: ordered groups of rule sets the engine iterates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from skscan.findings.models import Finding
from skscan.rules.builtin.dangerous_code import ALL_DANGEROUS_CODE_RULES
from skscan.rules.builtin.network import ALL_NETWORK_RULES
from skscan.rules.builtin.prompt_override import ALL_PROMPT_OVERRIDE_RULES
from skscan.rules.builtin.secrets import SECRET_PATTERN_RULES
from skscan.rules.models import Rule
from skscan.scanner.files import SkillFile
from skscan.scanner.rulesets import (
    EntropyRuleSet,
    ExfiltrationRuleSet,
    HiddenInstructionsRuleSet,
    HomoglyphRuleSet,
    ObfuscationRuleSet,
    PatternRuleSet,
    PromptOverrideRuleSet,
    RuleSet,
)


@dataclass(frozen=True)
class CategoryScanner:
    name: str
    rule_sets: Tuple[RuleSet, ...]

    def scan(self, files: Sequence[SkillFile]) -> List[Finding]:
        findings: List[Finding] = []
        for rule_set in self.rule_sets:
            findings.extend(rule_set.scan(files))
        return findings


CODE_SCANNER = CategoryScanner(
    name="code",
    rule_sets=(
        PatternRuleSet("secrets", SECRET_PATTERN_RULES),
        EntropyRuleSet(),
        PatternRuleSet("dangerous-code", ALL_DANGEROUS_CODE_RULES),
        PatternRuleSet("network", ALL_NETWORK_RULES),
        ObfuscationRuleSet(),
    ),
)

PROMPT_SCANNER = CategoryScanner(
    name="prompt",
    rule_sets=(
        PromptOverrideRuleSet(ALL_PROMPT_OVERRIDE_RULES),
        ExfiltrationRuleSet(),
        HiddenInstructionsRuleSet(),
    ),
)

HOMOGLYPH_SCANNER = CategoryScanner(name="homoglyph", rule_sets=(HomoglyphRuleSet(),))

DEFAULT_SCANNERS: Tuple[CategoryScanner, ...] = (CODE_SCANNER, PROMPT_SCANNER, HOMOGLYPH_SCANNER)


def default_scanners(custom_rules: Iterable[Rule] = ()) -> Tuple[CategoryScanner, ...]:
    """Built-in scanners, plus a ``custom`` scanner when *custom_rules* is non-empty."""
    custom = tuple(custom_rules)
    if not custom:
        return DEFAULT_SCANNERS
    return (
        *DEFAULT_SCANNERS,
        CategoryScanner(name="custom", rule_sets=(PatternRuleSet("custom", custom),)),
    )
