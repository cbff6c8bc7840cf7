"""Location and parsing of Surefire plain-text summary reports."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from randoop_soundness.filesystem_support import TEXT_PATTERN, find_files, is_surefire_summary

from .summary_models import ReportParseFailure, SummaryReport

_LOGGER = logging.getLogger(__name__)

SUMMARY_LINE_PREFIX = "Tests run:"
_SEGMENT_SEPARATOR = ", "
_KEY_VALUE_SEPARATOR = ": "
_EXCLUDED_KEY = "time elapsed"
_COUNT_VALUE = re.compile(r"\d+")


class ReportParseError(Exception):
    """Raised when a summary line holds a malformed count segment."""


def find_summary_reports(directory: Path, package_name: str) -> tuple[Path, ...]:
    """Return the package's RegressionTest/ErrorTest summaries anywhere below `directory`."""
    return tuple(
        sorted(
            path
            for path in find_files(directory, TEXT_PATTERN)
            if is_surefire_summary(path, package_name)
        )
    )


def parse_summary_line(line: str) -> dict[str, int] | None:
    """Parse `Tests run: 5, Failures: 0, ...` into a metric-to-count mapping.

    Returns None for lines that are not summary lines. The `Time elapsed`
    segment is a duration and is left out.

    Raises:
      ReportParseError: If a count segment is malformed or repeated.
    """
    if not line.startswith(SUMMARY_LINE_PREFIX):
        return None
    counts: dict[str, int] = {}
    for raw_segment in line.split(_SEGMENT_SEPARATOR):
        segment = raw_segment.strip()
        key, separator, value = segment.partition(_KEY_VALUE_SEPARATOR)
        key = key.strip()
        if key.lower() == _EXCLUDED_KEY:
            continue
        if not separator or not key:
            raise ReportParseError(f"Malformed count segment: {segment!r}")
        value = value.strip()
        if not _COUNT_VALUE.fullmatch(value):
            raise ReportParseError(f"Count for '{key}' is not a non-negative integer: {value!r}")
        if key in counts:
            raise ReportParseError(f"Duplicate count segment: {key!r}")
        counts[key] = int(value)
    return counts


def parse_summary_report(path: Path) -> dict[str, int] | None:
    """Return the counts of the first summary line in `path`, or None when there is none."""
    try:
        with path.open(encoding="utf-8") as handle:
            for line in handle:
                counts = parse_summary_line(line.rstrip("\r\n"))
                if counts is not None:
                    return counts
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportParseError(f"Cannot read summary report {path}: {exc}") from exc
    except ReportParseError as exc:
        raise ReportParseError(f"{path}: {exc}") from exc
    return None


def load_summary_reports(
    paths: Iterable[Path],
) -> tuple[tuple[SummaryReport, ...], tuple[ReportParseFailure, ...]]:
    """Parse each file independently; a bad file never stops the others."""
    reports: list[SummaryReport] = []
    failures: list[ReportParseFailure] = []
    for path in paths:
        try:
            counts = parse_summary_report(path)
        except ReportParseError as exc:
            _LOGGER.warning("Skipping unparsable summary report %s: %s", path, exc)
            failures.append(ReportParseFailure(path=path, message=str(exc)))
            continue
        if counts is not None:
            reports.append(SummaryReport(path=path, counts=counts))
    return tuple(reports), tuple(failures)
