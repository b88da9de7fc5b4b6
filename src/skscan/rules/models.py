"""Rule data model: pattern stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional

from skscan.config.schema import Category, LegacyCategory, Severity

CODE_EXTENSIONS: FrozenSet[str] = frozenset({".sh", ".py", ".js", ".ts", ".bash", ".zsh"})
JS_EXTENSIONS: FrozenSet[str] = frozenset({".js", ".ts"})
PY_EXTENSIONS: FrozenSet[str] = frozenset({".py"})
MARKDOWN_EXTENSIONS: FrozenSet[str] = frozenset({".md"})


def file_extension(path: str) -> str:
    """Lower-cased final suffix of *path* including the dot, or ``""``."""
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:].lower() if dot != -1 else ""


@dataclass
class Rule:
    """A single detection rule.

    ``pattern`` is stored as a raw string so the rule remains serialisable.
    The compiled regex is built lazily on first access via ``compiled_pattern``.
    ``extensions`` gates the rule to files with those suffixes; ``None`` means
    every file. ``guard`` receives each match and may reject it.
    """

    id: str
    name: str
    description: str
    category: Category
    group: LegacyCategory
    severity: Severity
    pattern: Optional[str] = None
    flags: int = 0
    extensions: Optional[FrozenSet[str]] = CODE_EXTENSIONS
    guard: Optional[Callable[[re.Match[str]], bool]] = field(
        default=None, repr=False, compare=False
    )
    min_entropy: Optional[float] = None
    min_length: Optional[int] = None

    # --- cached compiled objects (not serialised) ---
    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> Optional[re.Pattern[str]]:
        if self.pattern is None:
            return None
        if self._compiled_pattern is None:
            self._compiled_pattern = re.compile(self.pattern, self.flags)
        return self._compiled_pattern

    @property
    def is_entropy_rule(self) -> bool:
        return self.min_entropy is not None

    def applies_to(self, path: str) -> bool:
        if self.extensions is None:
            return True
        return file_extension(path) in self.extensions
