"""Built-in rules: aggregate all categories."""

from skscan.rules.builtin.dangerous_code import ALL_DANGEROUS_CODE_RULES
from skscan.rules.builtin.exfiltration import ALL_EXFILTRATION_RULES
from skscan.rules.builtin.hidden import ALL_HIDDEN_INSTRUCTION_RULES, ALL_OBFUSCATION_RULES
from skscan.rules.builtin.homoglyphs import ALL_HOMOGLYPH_RULES
from skscan.rules.builtin.network import ALL_NETWORK_RULES
from skscan.rules.builtin.prompt_override import ALL_PROMPT_OVERRIDE_RULES
from skscan.rules.builtin.secrets import ALL_SECRET_RULES
from skscan.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_SECRET_RULES,
    *ALL_DANGEROUS_CODE_RULES,
    *ALL_NETWORK_RULES,
    *ALL_PROMPT_OVERRIDE_RULES,
    *ALL_EXFILTRATION_RULES,
    *ALL_HIDDEN_INSTRUCTION_RULES,
    *ALL_OBFUSCATION_RULES,
    *ALL_HOMOGLYPH_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
