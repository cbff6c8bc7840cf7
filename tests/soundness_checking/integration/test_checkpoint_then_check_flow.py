"""Checkpoint and soundness-check flow across two builds."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from randoop_soundness.checkpointing import checkpoint
from randoop_soundness.configuration import load_configuration
from randoop_soundness.report_parsing import find_summary_reports
from randoop_soundness.soundness_checking import (
    SoundnessChecker,
    SoundnessDivergenceError,
    execute_soundness_check,
    pair_reports,
)

FIRST_RUN = "Tests run: 5, Failures: 0, Errors: 0, Skipped: 0, Time elapsed: 0.1"
SECOND_RUN = "Tests run: 5, Failures: 1, Errors: 0, Skipped: 0, Time elapsed: 0.1"


def _write_config(tmp_path: Path, **soundness: object) -> Path:
    config = {"project": {"package_name": "pkg"}, "soundness": soundness}
    path = tmp_path / "randoop-soundness.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def _write_report(tmp_path: Path, text: str) -> Path:
    reports = tmp_path / "target" / "surefire-reports"
    reports.mkdir(parents=True, exist_ok=True)
    report = reports / "pkg.RegressionTest.txt"
    report.write_text(text, encoding="utf-8")
    return reports


def test_checkpoint_then_check_byte_identical_reports_pass(tmp_path: Path) -> None:
    reports = _write_report(tmp_path, FIRST_RUN)
    snapshot = tmp_path / ".surefire.d"

    checkpoint("pkg", reports, snapshot)

    snapshot_report = snapshot / "pkg.RegressionTest.txt"
    assert snapshot_report.read_bytes() == (reports / "pkg.RegressionTest.txt").read_bytes()
    pairs = pair_reports(
        find_summary_reports(reports, "pkg"), find_summary_reports(snapshot, "pkg")
    )
    verdict = SoundnessChecker(pairs).check(fail_on_divergence=True)
    assert verdict.compared is True
    assert verdict.diverged is False


def test_use_case_detects_divergence_after_new_build(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    reports = _write_report(tmp_path, FIRST_RUN)
    checkpoint("pkg", reports, tmp_path / ".surefire.d")
    _write_report(tmp_path, SECOND_RUN)

    with pytest.raises(SoundnessDivergenceError) as excinfo:
        execute_soundness_check(load_configuration(config_path))

    assert [difference.metric for difference in excinfo.value.differences] == ["Failures"]


def test_use_case_soft_mode_returns_diverged_verdict(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_path = _write_config(tmp_path, fail_on_divergence=False)
    reports = _write_report(tmp_path, FIRST_RUN)
    checkpoint("pkg", reports, tmp_path / ".surefire.d")
    _write_report(tmp_path, SECOND_RUN)

    verdict = execute_soundness_check(load_configuration(config_path))

    assert verdict is not None
    assert verdict.diverged is True
    assert "diverged" in caplog.text


def test_use_case_override_disables_failure(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    reports = _write_report(tmp_path, FIRST_RUN)
    checkpoint("pkg", reports, tmp_path / ".surefire.d")
    _write_report(tmp_path, SECOND_RUN)

    verdict = execute_soundness_check(
        load_configuration(config_path), fail_on_divergence=False
    )

    assert verdict is not None
    assert verdict.diverged is True


def test_use_case_cold_start_passes_without_baseline(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    _write_report(tmp_path, SECOND_RUN)

    verdict = execute_soundness_check(load_configuration(config_path))

    assert verdict is not None
    assert verdict.compared is False


def test_use_case_without_reports_directory_returns_none(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    assert execute_soundness_check(load_configuration(config_path)) is None
