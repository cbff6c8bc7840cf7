"""Classpath assembly for the generator process."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

REPOSITORY_DIR_NAME = "repository"
DEFAULT_GENERATOR_VERSION = "4.3.2"


class ResolutionError(Exception):
    """Raised when a classpath entry cannot be turned into a well-formed path."""


def resolve_classpath(
    classes_dir: Path | str,
    dependency_artifacts: Sequence[Path | str],
    generator_jar: Path | None = None,
) -> tuple[Path, ...]:
    """Return the ordered classpath: project classes, dependencies, generator jar.

    Order matters for class loading precedence, so duplicates are kept.
    """
    entries = [to_classpath_entry(classes_dir)]
    entries.extend(to_classpath_entry(artifact) for artifact in dependency_artifacts)
    if generator_jar is not None:
        entries.append(to_classpath_entry(generator_jar))
    return tuple(entries)


def to_classpath_entry(location: Path | str) -> Path:
    """Convert one location into an absolute path.

    Raises:
      ResolutionError: If the location is empty or contains a NUL byte.
    """
    text = os.fspath(location)
    if not text.strip():
        raise ResolutionError("Classpath entry must not be empty.")
    if "\x00" in text:
        raise ResolutionError(f"Classpath entry contains a NUL byte: {text!r}")
    return Path(text).expanduser().absolute()


def join_classpath(entries: Iterable[Path]) -> str:
    return os.pathsep.join(str(entry) for entry in entries)


def read_classpath_file(path: Path) -> tuple[Path, ...]:
    """Read a dependency classpath written as one `os.pathsep`-joined line.

    This is the format `mvn dependency:build-classpath -Dmdep.outputFile=...` writes.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResolutionError(f"Cannot read dependency classpath file {path}: {exc}") from exc
    return tuple(
        to_classpath_entry(item.strip())
        for line in text.splitlines()
        for item in line.split(os.pathsep)
        if item.strip()
    )


def find_parent_dir(start: Path, target_name: str) -> Path | None:
    """Walk upward from `start` to the first directory named `target_name`."""
    if not target_name:
        raise ValueError("target_name must not be empty.")
    if not start.exists():
        return None
    current = start.absolute()
    for candidate in (current, *current.parents):
        if candidate.name == target_name:
            return candidate
    return None


def locate_generator_jar(
    seed_path: Path,
    version: str = DEFAULT_GENERATOR_VERSION,
    *,
    home: Path | None = None,
) -> Path | None:
    """Find `randoop-all-<version>.jar` in the local package repository.

    The repository root is the first ancestor of `seed_path` named
    `repository`, falling back to `~/.m2/repository`. Returns None when the
    jar is not on disk.
    """
    repository = find_parent_dir(seed_path, REPOSITORY_DIR_NAME)
    if repository is None:
        repository = (home or Path.home()) / ".m2" / REPOSITORY_DIR_NAME
        if not repository.exists():
            return None
    jar = repository / "randoop" / "randoop-all" / version / f"randoop-all-{version}.jar"
    if not jar.is_file():
        return None
    return jar
