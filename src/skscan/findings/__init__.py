"""Finding models and aggregation."""

from skscan.findings.aggregator import aggregate, merge_findings
from skscan.findings.models import Finding, ScanResult, Summary

__all__ = ["Finding", "ScanResult", "Summary", "aggregate", "merge_findings"]
