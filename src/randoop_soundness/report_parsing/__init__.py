"""Report parsing domain exports."""

from .summary_models import ReportParseFailure, SummaryReport
from .summary_parser import (
    SUMMARY_LINE_PREFIX,
    ReportParseError,
    find_summary_reports,
    load_summary_reports,
    parse_summary_line,
    parse_summary_report,
)

__all__ = [
    "SUMMARY_LINE_PREFIX",
    "ReportParseError",
    "ReportParseFailure",
    "SummaryReport",
    "find_summary_reports",
    "load_summary_reports",
    "parse_summary_line",
    "parse_summary_report",
]
