"""Summary report entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SummaryReport:
    """Counts extracted from one Surefire plain-text summary file."""

    path: Path
    counts: Mapping[str, int]


@dataclass(frozen=True)
class ReportParseFailure:
    """A summary file whose count line could not be parsed."""

    path: Path
    message: str
