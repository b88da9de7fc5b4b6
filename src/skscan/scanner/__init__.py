"""Scanner: engine, rule sets, file discovery."""

from skscan.scanner.engine import scan_skill
from skscan.scanner.files import DiscoveryError, SkillFile, discover_files
from skscan.scanner.scanners import DEFAULT_SCANNERS, CategoryScanner, default_scanners

__all__ = [
    "DEFAULT_SCANNERS",
    "CategoryScanner",
    "DiscoveryError",
    "SkillFile",
    "default_scanners",
    "discover_files",
    "scan_skill",
]
