"""Homoglyph rules: Cyrillic and Greek lookalikes mixed into Latin text or URLs."""

import re

from skscan.rules.models import Rule

CYRILLIC_LOOKALIKES = frozenset(
    "\u0430"  # а
    "\u0441"  # с
    "\u0435"  # е
    "\u043e"  # о
    "\u0440"  # р
    "\u0445"  # х
    "\u0443"  # у
    "\u0455"  # ѕ
)

GREEK_LOOKALIKES = frozenset(
    "\u03bf\u03b1"  # ο α
    "\u0391\u0392\u0395\u0397\u0399\u039a\u039c"  # Α Β Ε Η Ι Κ Μ
    "\u039d\u039f\u03a1\u03a4\u03a5\u03a7\u0396"  # Ν Ο Ρ Τ Υ Χ Ζ
)

LATIN_LETTER = re.compile(r"[a-zA-Z]")
URL = re.compile(r"https?://\S+")

CYRILLIC_MIX = Rule(
    id="homoglyph/cyrillic-mix",
    name="Latin/Cyrillic mix",
    description="Mixed Latin and Cyrillic scripts detected (homoglyph attack)",
    category="permissions",
    group="hidden-instructions",
    severity="critical",
    extensions=None,
)

GREEK_MIX = Rule(
    id="homoglyph/greek-mix",
    name="Latin/Greek mix",
    description="Mixed Latin and Greek scripts detected (homoglyph attack)",
    category="permissions",
    group="hidden-instructions",
    severity="critical",
    extensions=None,
)

IDN_URL = Rule(
    id="homoglyph/idn-url",
    name="IDN homograph URL",
    description="URL contains homoglyph characters (IDN homograph attack)",
    category="network",
    group="hidden-instructions",
    severity="critical",
    extensions=None,
)

ALL_HOMOGLYPH_RULES = [CYRILLIC_MIX, GREEK_MIX, IDN_URL]
