"""Exfiltration rules: sensitive references paired with a transmission or encode verb.

A rule's own pattern matches the sensitive reference; a finding additionally
needs one of the verb patterns below on the same line.
"""

import re

from skscan.rules.models import MARKDOWN_EXTENSIONS, Rule

TRANSMISSION_VERBS = re.compile(
    r"\b(?:send|post|upload|transmit|exfiltrate)\s+(?:the\s+)?"
    r"(?:contents?|data|files?|output|secrets?|keys?|tokens?|credentials?)\s+"
    r"(?:of|from|to)\b",
    re.IGNORECASE,
)

ENCODE_VERBS = re.compile(
    r"\b(?:encode\s+the\s+contents?|base64[\s-]+encode|include\s+(?:it\s+)?in\s+your\s+response)\b",
    re.IGNORECASE,
)

ENV_VARS = Rule(
    id="exfiltration/env-vars",
    name="Environment variable exfiltration",
    description="Exfiltration attempt: sensitive environment variable reference",
    category="network",
    group="exfiltration",
    severity="high",
    pattern=(
        r"\$\{?[A-Z_]*(?:API[_-]?KEY|SECRET|TOKEN|PASSWORD|CREDENTIAL|AWS_ACCESS|PRIVATE_KEY)[A-Z_]*"
        r"|process\.env\.|os\.environ"
    ),
    flags=re.IGNORECASE,
    extensions=MARKDOWN_EXTENSIONS,
)

SENSITIVE_PATHS = Rule(
    id="exfiltration/sensitive-paths",
    name="Sensitive path exfiltration",
    description="Exfiltration attempt: sensitive path reference",
    category="network",
    group="exfiltration",
    severity="high",
    pattern=(
        r"~/\.(?:ssh|aws|config|gnupg)\b"
        r"|(?<![\w.])\.env\b"
        r"|\.gitconfig\b"
        r"|/etc/(?:passwd|shadow)\b"
    ),
    extensions=MARKDOWN_EXTENSIONS,
)

ALL_EXFILTRATION_RULES = [ENV_VARS, SENSITIVE_PATHS]
