"""Dimension compatibility checks and reporting."""

from rcot.qa.compatibility import (
    allequal_multi,
    check_compatibility,
    compatibility_report,
)
from rcot.qa.reporting import (
    CompatibilityReport,
    GroupCheckResult,
    format_report_summary,
)

__all__ = [
    "allequal_multi",
    "check_compatibility",
    "compatibility_report",
    "CompatibilityReport",
    "GroupCheckResult",
    "format_report_summary",
]
