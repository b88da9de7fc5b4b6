"""Skill file model and on-disk discovery."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping

from skscan.scanner.globs import matches_any

logger = logging.getLogger(__name__)

SCANNABLE_EXTENSIONS = frozenset({".md", ".sh", ".py", ".js", ".ts", ".bash", ".zsh"})

SKIP_DIRS = frozenset({"node_modules", ".git", "dist", "__pycache__", ".venv", "venv"})

GITIGNORE_FILENAME = ".gitignore"


class DiscoveryError(Exception):
    """Raised when the scan target does not exist."""


@dataclass(frozen=True)
class SkillFile:
    """One file of a skill package: relative forward-slash path plus UTF-8 text."""

    path: str
    content: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkillFile":
        return cls(path=str(data["path"]), content=str(data["content"]))


def _read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8", errors="replace")


def gitignore_globs(text: str) -> List[str]:
    """Translate .gitignore lines into ignore globs matched against full paths.

    Blank lines and comments are skipped. Negations are not supported and are
    dropped. A pattern without an inner slash matches at any depth; a trailing
    slash limits it to directories.
    """
    globs: List[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("!"):
            logger.debug("Ignoring unsupported .gitignore negation %r", line)
            continue
        dir_only = line.endswith("/")
        rooted = "/" in line.rstrip("/")
        base = line.strip("/")
        if not base:
            continue
        prefix = "" if rooted else "**/"
        if not dir_only:
            globs.append(prefix + base)
        globs.append(prefix + base + "/**")
    return globs


def _load_gitignore(target: Path) -> List[str]:
    path = target / GITIGNORE_FILENAME
    if not path.is_file():
        return []
    try:
        return gitignore_globs(_read_text(path))
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return []


def discover_files(target: Path, max_file_size_kb: int = 512) -> List[SkillFile]:
    """Collect scannable files under *target* (a directory or a single file).

    Unreadable or oversized files are skipped with a warning, and files
    excluded by the directory's `.gitignore` are left out. Paths are relative
    to *target* and sorted.
    """
    if not target.exists():
        raise DiscoveryError(f"Path not found: {target}")

    limit = max_file_size_kb * 1024

    if target.is_file():
        candidates = [(target, target.name)]
    else:
        ignored = _load_gitignore(target)
        candidates = []
        for dirpath, dirnames, filenames in os.walk(target):
            dirnames[:] = sorted(
                d for d in dirnames if d not in SKIP_DIRS and not d.startswith(".")
            )
            for name in filenames:
                if name.startswith("."):
                    continue
                full = Path(dirpath) / name
                if full.suffix.lower() not in SCANNABLE_EXTENSIONS:
                    continue
                rel = full.relative_to(target).as_posix()
                if ignored and matches_any(rel, ignored):
                    continue
                candidates.append((full, rel))

    files: List[SkillFile] = []
    for full, rel in sorted(candidates, key=lambda c: c[1]):
        try:
            size = full.stat().st_size
            if size > limit:
                logger.warning("Skipping %s: %d bytes exceeds %d KB limit", rel, size, max_file_size_kb)
                continue
            files.append(SkillFile(path=rel, content=_read_text(full)))
        except OSError as exc:
            logger.warning("Skipping %s: %s", rel, exc)
    logger.debug("Discovered %d file(s) under %s", len(files), target)
    return files
