"""Snapshot of the latest summary reports used as the next comparison baseline."""

from __future__ import annotations

import logging
from pathlib import Path

from randoop_soundness.filesystem_support import (
    TEXT_PATTERN,
    copy_files,
    delete_tree_quietly,
    is_dir_empty,
    is_surefire_summary,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_DIRNAME = ".surefire.d"


class CheckpointError(Exception):
    """Raised when the snapshot directory cannot be created or filled."""


def checkpoint(
    package_name: str,
    surefire_reports_dir: Path,
    snapshot_dir: Path,
    force_cold_start: bool = False,
) -> tuple[Path, ...]:
    """Copy the current summary reports into `snapshot_dir` once per baseline lifetime.

    An existing snapshot is kept as is, so repeated calls are no-ops until a
    cold start wipes it. An empty snapshot directory holds no baseline and is
    filled like a missing one. Returns the paths written during this call.

    Raises:
      CheckpointError: If creating the snapshot directory or copying fails.
    """
    if force_cold_start:
        _LOGGER.info("Discarding prior executions baseline at %s", snapshot_dir)
        delete_tree_quietly(snapshot_dir)

    if snapshot_dir.exists() and not is_dir_empty(snapshot_dir):
        _LOGGER.debug("Keeping existing baseline at %s", snapshot_dir)
        return ()
    if not surefire_reports_dir.is_dir():
        _LOGGER.debug("No surefire reports at %s; nothing to checkpoint", surefire_reports_dir)
        return ()

    reports = sorted(
        path
        for path in surefire_reports_dir.glob(TEXT_PATTERN)
        if path.is_file() and is_surefire_summary(path, package_name)
    )
    if not reports:
        return ()

    try:
        copy_files(reports, snapshot_dir)
    except OSError as exc:
        # A partial snapshot would otherwise become the baseline.
        delete_tree_quietly(snapshot_dir)
        raise CheckpointError(
            f"Could not checkpoint surefire reports into {snapshot_dir}: {exc}"
        ) from exc
    _LOGGER.info("Checkpointed %d surefire report(s) into %s", len(reports), snapshot_dir)
    return tuple(snapshot_dir / path.name for path in reports)
