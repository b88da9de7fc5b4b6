"""Prompt-override rules: instruction hijacking phrases in markdown.

Patterns are matched against whitespace-normalized text, so a single ``\\s+``
between words also covers phrases wrapped across lines.
"""

import re

from skscan.rules.models import MARKDOWN_EXTENSIONS, Rule

IGNORE_INSTRUCTIONS = Rule(
    id="prompt-override/ignore-instructions",
    name="Ignore previous instructions",
    description='Prompt override: "ignore previous instructions"',
    category="permissions",
    group="prompt-override",
    severity="critical",
    pattern=r"ignore\s+(?:all\s+)?(?:previous|prior|above)\s+instructions",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

ROLE_CHANGE = Rule(
    id="prompt-override/role-change",
    name="Role reassignment",
    description="Prompt override: role reassignment attempt",
    category="permissions",
    group="prompt-override",
    severity="critical",
    pattern=r"you\s+are\s+now\s+(?:a|an|the)\b|your\s+new\s+role\s+is\b|act\s+as\s+if\b",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

FORGET = Rule(
    id="prompt-override/forget",
    name="Forget everything",
    description='Prompt override: "forget everything"',
    category="permissions",
    group="prompt-override",
    severity="critical",
    pattern=r"forget\s+everything\s+above|forget\s+(?:all\s+)?your\s+instructions",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

DISREGARD = Rule(
    id="prompt-override/disregard",
    name="Disregard directive",
    description='Prompt override: "disregard" directive',
    category="permissions",
    group="prompt-override",
    severity="critical",
    pattern=r"disregard\s+(?:all\s+)?(?:previous|prior|your|above)\b",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

OVERRIDE = Rule(
    id="prompt-override/override",
    name="System prompt override",
    description="Prompt override: system prompt override attempt",
    category="permissions",
    group="prompt-override",
    severity="critical",
    pattern=(
        r"override\s+(?:the\s+)?(?:system|safety|security)\s+(?:prompt|instructions|rules|settings)"
        r"|override\s+(?:the\s+)?prompt\b"
        r"|override\s+your\s+(?:instructions|rules|guidelines)"
    ),
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

NO_RESTRICTIONS = Rule(
    id="prompt-override/no-restrictions",
    name="Restriction removal",
    description="Prompt override: restriction removal attempt",
    category="permissions",
    group="prompt-override",
    severity="high",
    pattern=r"act\s+as\s+if\s+you\s+have\s+no\s+restrictions|pretend\s+you\s+can\b",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

NEW_INSTRUCTIONS = Rule(
    id="prompt-override/new-instructions",
    name="New instructions declaration",
    description="Prompt override: new instructions declaration",
    category="permissions",
    group="prompt-override",
    severity="high",
    pattern=r"\bnew\s+(?:system\s+)?instructions?\s*:",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

DO_NOT_FOLLOW = Rule(
    id="prompt-override/do-not-follow",
    name="Instruction negation",
    description="Prompt override: instruction negation",
    category="permissions",
    group="prompt-override",
    severity="high",
    pattern=r"\bdo\s+not\s+follow\s+(?:the\s+)?(?:previous|above|prior|original)\b",
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

ALL_PROMPT_OVERRIDE_RULES = [
    IGNORE_INSTRUCTIONS,
    ROLE_CHANGE,
    FORGET,
    DISREGARD,
    OVERRIDE,
    NO_RESTRICTIONS,
    NEW_INSTRUCTIONS,
    DO_NOT_FOLLOW,
]
