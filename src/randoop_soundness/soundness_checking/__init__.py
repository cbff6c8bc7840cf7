"""Soundness checking domain exports."""

from .soundness_checker import (
    SoundnessChecker,
    SoundnessDivergenceError,
    describe_differences,
    diff_counts,
    pair_reports,
)
from .soundness_outcomes import CountDifference, ReportPair, SoundnessVerdict
from .soundness_use_case import execute_soundness_check

__all__ = [
    "CountDifference",
    "ReportPair",
    "SoundnessChecker",
    "SoundnessDivergenceError",
    "SoundnessVerdict",
    "describe_differences",
    "diff_counts",
    "execute_soundness_check",
    "pair_reports",
]
