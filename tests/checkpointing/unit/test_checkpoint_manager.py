"""Checkpoint manager tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from randoop_soundness.checkpointing.checkpoint_manager import CheckpointError, checkpoint

REPORT = "Tests run: 5, Failures: 0, Errors: 0, Skipped: 0, Time elapsed: 0.1\n"


def _reports_dir(tmp_path: Path) -> Path:
    reports = tmp_path / "target" / "surefire-reports"
    reports.mkdir(parents=True)
    (reports / "pkg.RegressionTest.txt").write_text(REPORT, encoding="utf-8")
    (reports / "pkg.ErrorTest.txt").write_text(REPORT, encoding="utf-8")
    (reports / "pkg.CartTest.txt").write_text(REPORT, encoding="utf-8")
    (reports / "TEST-pkg.RegressionTest.xml").write_text("<xml/>", encoding="utf-8")
    nested = reports / "nested"
    nested.mkdir()
    (nested / "pkg.RegressionTest.txt").write_text("nested", encoding="utf-8")
    return reports


def test_checkpoint_copies_matching_reports_into_new_snapshot(tmp_path: Path) -> None:
    reports = _reports_dir(tmp_path)
    snapshot = tmp_path / ".surefire.d"

    copied = checkpoint("pkg", reports, snapshot)

    assert sorted(path.name for path in copied) == ["pkg.ErrorTest.txt", "pkg.RegressionTest.txt"]
    assert sorted(path.name for path in snapshot.iterdir()) == [
        "pkg.ErrorTest.txt",
        "pkg.RegressionTest.txt",
    ]
    assert (snapshot / "pkg.RegressionTest.txt").read_text(encoding="utf-8") == REPORT


def test_checkpoint_is_a_noop_while_snapshot_exists(tmp_path: Path) -> None:
    reports = _reports_dir(tmp_path)
    snapshot = tmp_path / ".surefire.d"
    checkpoint("pkg", reports, snapshot)
    (reports / "pkg.RegressionTest.txt").write_text(
        "Tests run: 6, Failures: 1, Errors: 0, Skipped: 0\n", encoding="utf-8"
    )

    copied = checkpoint("pkg", reports, snapshot)

    assert copied == ()
    assert (snapshot / "pkg.RegressionTest.txt").read_text(encoding="utf-8") == REPORT


def test_cold_start_replaces_existing_snapshot(tmp_path: Path) -> None:
    reports = _reports_dir(tmp_path)
    snapshot = tmp_path / ".surefire.d"
    checkpoint("pkg", reports, snapshot)
    (snapshot / "stale.txt").write_text("stale", encoding="utf-8")
    updated = "Tests run: 6, Failures: 1, Errors: 0, Skipped: 0\n"
    (reports / "pkg.RegressionTest.txt").write_text(updated, encoding="utf-8")

    checkpoint("pkg", reports, snapshot, force_cold_start=True)

    assert not (snapshot / "stale.txt").exists()
    assert (snapshot / "pkg.RegressionTest.txt").read_text(encoding="utf-8") == updated


def test_missing_reports_directory_is_not_an_error(tmp_path: Path) -> None:
    snapshot = tmp_path / ".surefire.d"

    assert checkpoint("pkg", tmp_path / "missing", snapshot) == ()
    assert not snapshot.exists()


def test_cold_start_without_reports_leaves_no_snapshot(tmp_path: Path) -> None:
    snapshot = tmp_path / ".surefire.d"
    snapshot.mkdir()
    (snapshot / "pkg.RegressionTest.txt").write_text(REPORT, encoding="utf-8")

    checkpoint("pkg", tmp_path / "missing", snapshot, force_cold_start=True)

    assert not snapshot.exists()


def test_snapshot_is_not_created_when_nothing_matches(tmp_path: Path) -> None:
    reports = tmp_path / "reports"
    reports.mkdir()
    (reports / "pkg.CartTest.txt").write_text(REPORT, encoding="utf-8")
    snapshot = tmp_path / ".surefire.d"

    assert checkpoint("pkg", reports, snapshot) == ()
    assert not snapshot.exists()


def test_copy_failure_raises_checkpoint_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    reports = _reports_dir(tmp_path)

    def _fail(*_args, **_kwargs):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(shutil, "copyfile", _fail)

    with pytest.raises(CheckpointError, match="read-only filesystem"):
        checkpoint("pkg", reports, tmp_path / ".surefire.d")
    assert not (tmp_path / ".surefire.d").exists()


def test_empty_snapshot_directory_is_filled(tmp_path: Path) -> None:
    reports = _reports_dir(tmp_path)
    snapshot = tmp_path / ".surefire.d"
    snapshot.mkdir()

    copied = checkpoint("pkg", reports, snapshot)

    assert sorted(path.name for path in copied) == ["pkg.ErrorTest.txt", "pkg.RegressionTest.txt"]
    assert (snapshot / "pkg.RegressionTest.txt").read_text(encoding="utf-8") == REPORT
