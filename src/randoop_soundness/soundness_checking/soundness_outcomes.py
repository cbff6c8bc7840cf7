"""Soundness checking domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from randoop_soundness.report_parsing.summary_models import ReportParseFailure, SummaryReport


@dataclass(frozen=True)
class ReportPair:
    """The same logical summary report taken from the current run and the baseline."""

    current: Path
    previous: Path


@dataclass(frozen=True)
class CountDifference:
    """One metric whose count differs between the two compared reports."""

    metric: str
    current: int | None
    previous: int | None


@dataclass(frozen=True)
class SoundnessVerdict:
    """Outcome of one soundness check."""

    parsed_reports: tuple[SummaryReport, ...]
    compared: bool
    differences: tuple[CountDifference, ...]
    parse_failures: tuple[ReportParseFailure, ...] = ()

    @property
    def diverged(self) -> bool:
        """Return True when the compared reports disagree on any count."""
        return bool(self.differences)
