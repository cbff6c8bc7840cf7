"""Filesystem support exports."""

from .path_operations import (
    GENERATED_TEST_NAME,
    JAVA_PATTERN,
    TEXT_PATTERN,
    copy_files,
    delete_tree_quietly,
    find_files,
    find_generated_test_sources,
    is_dir_empty,
    is_generated_test_source,
    is_surefire_summary,
)

__all__ = [
    "GENERATED_TEST_NAME",
    "JAVA_PATTERN",
    "TEXT_PATTERN",
    "copy_files",
    "delete_tree_quietly",
    "find_files",
    "find_generated_test_sources",
    "is_dir_empty",
    "is_generated_test_source",
    "is_surefire_summary",
]
