"""Comparison of current summary counts against the checkpointed baseline."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from randoop_soundness.report_parsing import load_summary_reports

from .soundness_outcomes import CountDifference, ReportPair, SoundnessVerdict

_LOGGER = logging.getLogger(__name__)

_EXPECTED_REPORT_COUNT = 2


class SoundnessDivergenceError(Exception):
    """Raised when generated tests report different counts before and after."""

    def __init__(self, differences: Sequence[CountDifference]) -> None:
        self.differences = tuple(differences)
        super().__init__(
            "Generated unit tests before and after have diverged:\n"
            + describe_differences(self.differences)
        )


def pair_reports(current: Iterable[Path], previous: Iterable[Path]) -> tuple[ReportPair, ...]:
    """Pair current and baseline reports whose file names match case-insensitively."""
    previous_by_name: dict[str, Path] = {}
    for path in previous:
        previous_by_name.setdefault(path.name.lower(), path)
    pairs = [
        ReportPair(current=path, previous=previous_by_name[path.name.lower()])
        for path in current
        if path.name.lower() in previous_by_name
    ]
    return tuple(sorted(pairs, key=lambda pair: pair.current.name.lower()))


def diff_counts(
    current: Mapping[str, int], previous: Mapping[str, int]
) -> tuple[CountDifference, ...]:
    """Return every metric missing on one side or holding a different value."""
    return tuple(
        CountDifference(metric=metric, current=current.get(metric), previous=previous.get(metric))
        for metric in sorted(set(current) | set(previous))
        if current.get(metric) != previous.get(metric)
    )


def describe_differences(differences: Sequence[CountDifference]) -> str:
    lines = []
    for difference in differences:
        previous = "<missing>" if difference.previous is None else difference.previous
        current = "<missing>" if difference.current is None else difference.current
        lines.append(f"  {difference.metric}: before={previous}, after={current}")
    return "\n".join(lines)


class SoundnessChecker:  # pylint: disable=too-few-public-methods
    """Parses paired reports and decides whether their counts diverged."""

    def __init__(self, pairs: Iterable[ReportPair]) -> None:
        self._pairs = tuple(pairs)

    def check(self, fail_on_divergence: bool = True) -> SoundnessVerdict:
        """Compare the parsed counts of all pairs.

        Exactly two parsed reports are needed for a meaningful comparison; with
        any other number the check passes without comparing. Sides without a
        summary line or with a malformed one are skipped.

        Raises:
          SoundnessDivergenceError: If the counts differ and `fail_on_divergence` is set.
        """
        paths = [path for pair in self._pairs for path in (pair.current, pair.previous)]
        reports, failures = load_summary_reports(paths)

        if len(reports) != _EXPECTED_REPORT_COUNT:
            _LOGGER.info(
                "Soundness comparison skipped: %d parsed report(s), %d needed",
                len(reports),
                _EXPECTED_REPORT_COUNT,
            )
            return SoundnessVerdict(
                parsed_reports=reports,
                compared=False,
                differences=(),
                parse_failures=failures,
            )

        # Each pair may have parsed on one side only, so the two records can come from
        # different suites; they are still compared as current against previous.
        current, previous = reports
        differences = diff_counts(current.counts, previous.counts)
        if differences and fail_on_divergence:
            raise SoundnessDivergenceError(differences)
        return SoundnessVerdict(
            parsed_reports=reports,
            compared=True,
            differences=differences,
            parse_failures=failures,
        )
