"""Rule catalog: models, registry, built-in rules."""

from skscan.rules.models import CODE_EXTENSIONS, Rule, file_extension
from skscan.rules.registry import RuleLoadError, RuleRegistry, build_registry

__all__ = [
    "CODE_EXTENSIONS",
    "Rule",
    "RuleLoadError",
    "RuleRegistry",
    "build_registry",
    "file_extension",
]
