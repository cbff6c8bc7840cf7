"""Discovery of compiled classes that belong to one package."""

from __future__ import annotations

import logging
import re
import zipfile
from collections.abc import Iterator, Sequence
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

_CLASS_SUFFIX = ".class"
_IGNORED_SIMPLE_NAMES = {"package-info", "module-info"}
_ANONYMOUS_CLASS = re.compile(r"\$\d")


def list_package_classes(classpath: Sequence[Path], package_name: str) -> tuple[str, ...]:
    """Return the fully-qualified names of classes declared directly in `package_name`.

    Directory entries and jar entries are both scanned. Package names compare
    case-insensitively; sub-packages, `package-info`, `module-info` and
    anonymous classes are left out. Jar handles stay open only for the scan.
    """
    wanted = package_name.lower()
    found: set[str] = set()
    for entry in classpath:
        for qualified_name in _iter_class_names(entry):
            package, _, simple_name = qualified_name.rpartition(".")
            if package.lower() != wanted:
                continue
            if simple_name in _IGNORED_SIMPLE_NAMES or _ANONYMOUS_CLASS.search(simple_name):
                continue
            found.add(qualified_name)
    return tuple(sorted(found))


def _iter_class_names(entry: Path) -> Iterator[str]:
    if entry.is_dir():
        for class_file in entry.rglob(f"*{_CLASS_SUFFIX}"):
            yield _to_qualified_name(class_file.relative_to(entry).as_posix())
    elif entry.is_file() and zipfile.is_zipfile(entry):
        try:
            with zipfile.ZipFile(entry) as archive:
                names = archive.namelist()
        except (OSError, zipfile.BadZipFile) as exc:
            _LOGGER.warning("Could not scan %s for classes: %s", entry, exc)
            return
        for name in names:
            if name.endswith(_CLASS_SUFFIX) and not name.startswith("META-INF/"):
                yield _to_qualified_name(name)


def _to_qualified_name(relative_path: str) -> str:
    return relative_path[: -len(_CLASS_SUFFIX)].replace("/", ".")
