"""Report generation for complytrack."""

from complytrack.reports.engine import (
    DEFAULT_CRITICAL_CATEGORIES,
    FALLBACK_RECOMMENDATIONS,
    ReportEngine,
)
from complytrack.reports.export import (
    export_report_json,
    format_compliance_report_markdown,
    format_gap_report_markdown,
)

__all__ = [
    "DEFAULT_CRITICAL_CATEGORIES",
    "FALLBACK_RECOMMENDATIONS",
    "ReportEngine",
    "export_report_json",
    "format_compliance_report_markdown",
    "format_gap_report_markdown",
]
