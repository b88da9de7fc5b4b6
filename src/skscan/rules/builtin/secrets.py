"""Secret detection rules: cloud keys, tokens, private keys, credential assignments."""

import re

from skscan.rules.models import Rule

AWS_KEY = Rule(
    id="secrets/aws-key",
    name="AWS access key",
    description="AWS access key ID detected",
    category="secrets",
    group="secrets",
    severity="critical",
    pattern=r"AKIA[0-9A-Z]{16}",
)

GITHUB_TOKEN = Rule(
    id="secrets/github-token",
    name="GitHub token",
    description="GitHub token detected",
    category="secrets",
    group="secrets",
    severity="critical",
    pattern=r"(?:ghp|gho|ghu|ghs)_[A-Za-z0-9_]{36,}",
)

SLACK_TOKEN = Rule(
    id="secrets/slack-token",
    name="Slack token",
    description="Slack token detected",
    category="secrets",
    group="secrets",
    severity="critical",
    pattern=r"xox[bps]-[0-9]{10,13}-[0-9A-Za-z-]{10,}",
)

PRIVATE_KEY = Rule(
    id="secrets/private-key",
    name="Private key",
    description="Private key detected",
    category="secrets",
    group="secrets",
    severity="critical",
    pattern=r"-----BEGIN (?:RSA |EC |DSA |OPENSSH |PGP |ENCRYPTED )?PRIVATE KEY(?: BLOCK)?-----",
)

GENERIC_API_KEY = Rule(
    id="secrets/generic-api-key",
    name="Generic API key",
    description="Generic API key assignment detected",
    category="secrets",
    group="secrets",
    severity="high",
    pattern=(
        r"(?:api[_-]?key|apikey|api[_-]?secret|secret[_-]?key)"
        r"""\s*[:=]\s*["']?[A-Za-z0-9_\-/+]{20,}["']?"""
    ),
    flags=re.IGNORECASE,
)

PASSWORD_ASSIGNMENT = Rule(
    id="secrets/password-assignment",
    name="Password assignment",
    description="Password assignment detected",
    category="secrets",
    group="secrets",
    severity="high",
    pattern=r"""(?:password|passwd|pwd)\s*[:=]\s*["'][^"']+["']""",
    flags=re.IGNORECASE,
)

# Scored by Shannon entropy over quoted literals, not by regex.
HIGH_ENTROPY = Rule(
    id="secrets/high-entropy",
    name="High-entropy string",
    description="High-entropy string detected",
    category="secrets",
    group="secrets",
    severity="medium",
    min_entropy=4.5,
    min_length=20,
)

SECRET_PATTERN_RULES = [
    AWS_KEY,
    GITHUB_TOKEN,
    SLACK_TOKEN,
    PRIVATE_KEY,
    GENERIC_API_KEY,
    PASSWORD_ASSIGNMENT,
]

ALL_SECRET_RULES = [*SECRET_PATTERN_RULES, HIGH_ENTROPY]
