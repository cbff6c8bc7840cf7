"""Classpath resolution exports."""

from .class_scanner import list_package_classes
from .classpath_resolver import (
    DEFAULT_GENERATOR_VERSION,
    ResolutionError,
    find_parent_dir,
    join_classpath,
    locate_generator_jar,
    read_classpath_file,
    resolve_classpath,
    to_classpath_entry,
)

__all__ = [
    "DEFAULT_GENERATOR_VERSION",
    "ResolutionError",
    "find_parent_dir",
    "join_classpath",
    "list_package_classes",
    "locate_generator_jar",
    "read_classpath_file",
    "resolve_classpath",
    "to_classpath_entry",
]
