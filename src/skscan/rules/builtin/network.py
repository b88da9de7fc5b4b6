"""Network egress rules: outbound HTTP call surfaces in code files."""

from skscan.rules.models import Rule

_VERBS = r"(?:get|post|put|patch|delete|head|request)"

FETCH = Rule(
    id="network/fetch",
    name="fetch() call",
    description="Outbound HTTP request via fetch() detected",
    category="network",
    group="dangerous-code",
    severity="medium",
    pattern=r"\bfetch\s*\(",
)

AXIOS = Rule(
    id="network/axios",
    name="axios call",
    description="Outbound HTTP request via axios detected",
    category="network",
    group="dangerous-code",
    severity="medium",
    pattern=rf"\baxios(?:\.{_VERBS})?\s*\(",
)

REQUESTS = Rule(
    id="network/requests",
    name="requests call",
    description="Outbound HTTP request via Python requests detected",
    category="network",
    group="dangerous-code",
    severity="medium",
    pattern=rf"\brequests\.{_VERBS}\s*\(",
)

URLLIB = Rule(
    id="network/urllib",
    name="urllib.request import",
    description="Outbound HTTP capability via urllib.request detected",
    category="network",
    group="dangerous-code",
    severity="medium",
    pattern=r"\burllib\.request\b|\bfrom\s+urllib\s+import\s+request\b",
)

ALL_NETWORK_RULES = [FETCH, AXIOS, REQUESTS, URLLIB]
