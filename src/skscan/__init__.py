"""skscan: static security scanner for AI-agent skill packages."""

__version__ = "0.1.0"

# Rule-set revision stamped on every ScanResult.
ENGINE_VERSION = "0.1.0"
