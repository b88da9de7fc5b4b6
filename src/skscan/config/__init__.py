"""Configuration loading, schema, and defaults."""

from skscan.config.loader import ConfigError, load_config
from skscan.config.schema import (
    Category,
    ScanConfig,
    ScanStatus,
    Severity,
    SkscanConfig,
)

__all__ = [
    "Category",
    "ConfigError",
    "ScanConfig",
    "ScanStatus",
    "Severity",
    "SkscanConfig",
    "load_config",
]
