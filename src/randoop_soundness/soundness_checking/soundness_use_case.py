"""`test-soundness` use-case service."""

from __future__ import annotations

import logging

from randoop_soundness.configuration import Configuration
from randoop_soundness.report_parsing import find_summary_reports

from .soundness_checker import SoundnessChecker, describe_differences, pair_reports
from .soundness_outcomes import SoundnessVerdict

_LOGGER = logging.getLogger(__name__)


def execute_soundness_check(
    configuration: Configuration, *, fail_on_divergence: bool | None = None
) -> SoundnessVerdict | None:
    """Compare the current summary reports with the checkpointed baseline.

    Returns None when skipped by configuration or when no reports exist yet.
    `fail_on_divergence` overrides the configured value when given.
    """
    if configuration.skip:
        _LOGGER.info("Skipping soundness check.")
        return None

    package_name = configuration.project.package_name
    settings = configuration.soundness
    if not settings.surefire_reports_dir.is_dir():
        _LOGGER.info("No surefire reports at %s; nothing to check.", settings.surefire_reports_dir)
        return None

    current = find_summary_reports(settings.surefire_reports_dir, package_name)
    previous = find_summary_reports(settings.snapshot_dir, package_name)
    pairs = pair_reports(current, previous)
    _LOGGER.debug(
        "Found %d current and %d checkpointed report(s), %d pair(s).",
        len(current),
        len(previous),
        len(pairs),
    )

    should_fail = settings.fail_on_divergence if fail_on_divergence is None else fail_on_divergence
    verdict = SoundnessChecker(pairs).check(fail_on_divergence=should_fail)
    if verdict.diverged:
        _LOGGER.warning(
            "Generated unit tests before and after have diverged:\n%s",
            describe_differences(verdict.differences),
        )
    elif verdict.compared:
        _LOGGER.info("Generated unit tests are consistent with the checkpointed baseline.")
    return verdict
