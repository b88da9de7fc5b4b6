"""Hidden-content rules: invisible unicode, HTML comments, base64 and code obfuscation."""

import re

from skscan.rules.models import MARKDOWN_EXTENSIONS, Rule

# Zero-width space/joiners, directional marks, BOM, soft hyphen, tag characters.
ZERO_WIDTH_CHARS = Rule(
    id="hidden-instructions/zero-width-chars",
    name="Zero-width characters",
    description="Zero-width characters detected (possible hidden instructions)",
    category="permissions",
    group="hidden-instructions",
    severity="critical",
    pattern=r"[\u200b-\u200f\ufeff\u00ad\U000e0000-\U000e007f]",
    extensions=MARKDOWN_EXTENSIONS,
)

INVISIBLE_UNICODE = Rule(
    id="hidden-instructions/invisible-unicode",
    name="Invisible unicode",
    description="Invisible or confusable Unicode characters detected",
    category="permissions",
    group="hidden-instructions",
    severity="medium",
    pattern=(
        r"[\u00a0\u2000-\u200a\u2028\u2029\u202a-\u202f\u205f-\u2064\u2066-\u206f"
        r"\u180e\u034f\u115f\u1160\u17b4\u17b5\u3164\uffa0]"
    ),
    extensions=MARKDOWN_EXTENSIONS,
)

# Pattern captures the comment body; the keyword check runs on the body.
HTML_COMMENT_INJECTION = Rule(
    id="hidden-instructions/html-comment-injection",
    name="HTML comment instructions",
    description="HTML comment containing instruction keywords detected",
    category="permissions",
    group="hidden-instructions",
    severity="high",
    pattern=r"<!--(.*?)-->",
    flags=re.DOTALL,
    extensions=MARKDOWN_EXTENSIONS,
)

COMMENT_KEYWORDS = re.compile(
    r"\b(?:if|when|always|never|must|ignore|override|forget|system)\b",
    re.IGNORECASE,
)

BASE64_MIN_LENGTH = 50

BASE64_PAYLOAD = Rule(
    id="hidden-instructions/base64-payload",
    name="Base64 payload",
    description="Long base64-encoded string in markdown body (possible hidden payload)",
    category="permissions",
    group="hidden-instructions",
    severity="medium",
    pattern=rf"[A-Za-z0-9+/]{{{BASE64_MIN_LENGTH},}}={{0,2}}",
    extensions=MARKDOWN_EXTENSIONS,
)

HEX_ESCAPE = Rule(
    id="obfuscation/hex-escape",
    name="Hex escape obfuscation",
    description="Long hex-encoded string detected",
    category="permissions",
    group="hidden-instructions",
    severity="high",
    pattern=r"(?:\\x[0-9a-fA-F]{2}){10,}",
)

HEX_DENSITY_MESSAGE = "High density of hex escape sequences detected (possible obfuscation)"
HEX_ESCAPE_TOKEN = re.compile(r"\\x[0-9a-fA-F]{2}|\\u[0-9a-fA-F]{4}")
HEX_DENSITY_THRESHOLD = 0.3
HEX_DENSITY_MIN_LINE = 20

CHAR_CONCAT = Rule(
    id="obfuscation/char-concat",
    name="Character concatenation",
    description="Character-by-character string concatenation detected (possible obfuscation)",
    category="permissions",
    group="hidden-instructions",
    severity="high",
    pattern=r"""(['"]).\1\s*\+\s*(['"]).\2\s*\+\s*(['"]).\3\s*\+\s*(['"]).\4""",
)

ALL_HIDDEN_INSTRUCTION_RULES = [
    ZERO_WIDTH_CHARS,
    INVISIBLE_UNICODE,
    HTML_COMMENT_INJECTION,
    BASE64_PAYLOAD,
]

ALL_OBFUSCATION_RULES = [HEX_ESCAPE, CHAR_CONCAT]
