"""Filesystem helpers shared by generation and soundness verification."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
import shutil
from collections.abc import Iterable
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

TEXT_PATTERN = "*.txt"
JAVA_PATTERN = "*.java"

# Names of the JUnit suites the generator writes (RegressionTest0, ErrorTest_lit, ...).
GENERATED_TEST_NAME = re.compile(r"(?:Regression|Error)Tests?(?:\d*|.+)")


def find_files(directory: Path, pattern: str, *skip_hints: str) -> list[Path]:
    """List readable regular files below `directory` whose names match `pattern`.

    Files whose name contains any of the `skip_hints` are left out. A missing
    directory yields an empty list.
    """
    if not directory.is_dir():
        return []
    hints = {hint for hint in skip_hints if hint}
    results: list[Path] = []
    for root, _dirs, names in os.walk(directory):
        for name in names:
            candidate = Path(root) / name
            if not candidate.is_file() or not os.access(candidate, os.R_OK):
                continue
            if not fnmatch.fnmatch(name, pattern):
                continue
            if any(hint in name for hint in hints):
                continue
            results.append(candidate)
    return results


def is_surefire_summary(path: Path, package_name: str) -> bool:
    """Return True when `path` names one of the package's generated-suite summaries."""
    name = path.name.lower()
    return name in {
        f"{package_name}.RegressionTest.txt".lower(),
        f"{package_name}.ErrorTest.txt".lower(),
    }


def is_generated_test_source(path: Path) -> bool:
    """Return True for Java sources named like generated regression/error suites."""
    return path.suffix == ".java" and GENERATED_TEST_NAME.fullmatch(path.stem) is not None


def find_generated_test_sources(directory: Path) -> list[Path]:
    return [path for path in find_files(directory, JAVA_PATTERN) if is_generated_test_source(path)]


def copy_files(files: Iterable[Path], target_dir: Path) -> Path:
    """Copy `files` into `target_dir`, keeping names and overwriting collisions.

    Raises:
      OSError: If the target directory cannot be created or a copy fails.
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    for source in files:
        shutil.copyfile(source, target_dir / source.name)
    return target_dir


def is_dir_empty(path: Path) -> bool:
    if not path.is_dir():
        return False
    return next(path.iterdir(), None) is None


def delete_tree_quietly(path: Path) -> bool:
    """Delete `path` and everything beneath it, deepest entries first.

    Failures are logged and never raised. Returns True when nothing is left
    at `path` afterwards.
    """
    if not os.path.lexists(path):
        return True
    if path.is_file() or path.is_symlink():
        _unlink_quietly(path)
        return not os.path.lexists(path)
    for root, dirs, names in os.walk(path, topdown=False):
        for name in names:
            _unlink_quietly(Path(root) / name)
        for name in dirs:
            child = Path(root) / name
            if child.is_symlink():
                _unlink_quietly(child)
            else:
                _rmdir_quietly(child)
    _rmdir_quietly(path)
    return not os.path.lexists(path)


def _unlink_quietly(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        _LOGGER.warning("Could not delete %s. Error details: %s", path, exc)


def _rmdir_quietly(path: Path) -> None:
    try:
        path.rmdir()
    except OSError as exc:
        _LOGGER.warning("Could not delete %s. Error details: %s", path, exc)
