"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from randoop_soundness.classpath_resolution import DEFAULT_GENERATOR_VERSION

from .runtime_settings import Configuration, GenerationSettings, ProjectSettings, SoundnessSettings

DEFAULT_CLASSES_DIR = "target/classes"
DEFAULT_OUTPUT_DIR = "target/generated-test-sources/java"
DEFAULT_SUREFIRE_REPORTS_DIR = "target/surefire-reports"
DEFAULT_SNAPSHOT_DIR = ".surefire.d"
DEFAULT_TIME_LIMIT_SECONDS = 60
DEFAULT_JAVA_EXECUTABLE = "java"
DEFAULT_ENTRY_POINT = "randoop.main.Main"

_PACKAGE_NAME = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")
_PATH_SEGMENT = re.compile(r"[^/\\]+")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return build_configuration(parsed, base_path=path.resolve().parent, source=path)


def build_configuration(
    document: Mapping[str, Any], *, base_path: Path, source: Path | None = None
) -> Configuration:
    """Validate an already parsed configuration document."""
    project = _parse_project_section(document.get("project"), base_path)
    generation = _parse_generation_section(document.get("generation"), project.base_dir)
    soundness = _parse_soundness_section(document.get("soundness"), project.base_dir)
    skip = _optional_bool(document.get("skip"), "skip", default=False)
    return Configuration(
        path=source,
        project=project,
        generation=generation,
        soundness=soundness,
        skip=skip,
    )


def _parse_project_section(value: Any, base_path: Path) -> ProjectSettings:
    section = _require_mapping(value, "project")
    package_name = _require_non_empty_string(section.get("package_name"), "project.package_name")
    if not _PACKAGE_NAME.fullmatch(package_name):
        raise ConfigurationError(
            f"project.package_name '{package_name}' is not a valid Java package name."
        )
    base_dir = _resolve_path(
        base_path, _optional_string(section.get("base_dir"), "project.base_dir") or "."
    )
    classes_dir = _resolve_path(
        base_dir,
        _optional_string(section.get("classes_dir"), "project.classes_dir") or DEFAULT_CLASSES_DIR,
    )
    artifacts = tuple(
        _resolve_path(base_dir, item)
        for item in _normalize_string_sequence(
            section.get("dependency_artifacts"), "project.dependency_artifacts"
        )
    )
    classpath_file_value = _optional_string(
        section.get("dependency_classpath_file"), "project.dependency_classpath_file"
    )
    classpath_file = _resolve_path(base_dir, classpath_file_value) if classpath_file_value else None
    return ProjectSettings(
        base_dir=base_dir,
        package_name=package_name,
        classes_dir=classes_dir,
        dependency_artifacts=artifacts,
        dependency_classpath_file=classpath_file,
    )


def _parse_generation_section(value: Any, base_dir: Path) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    output_dir = _resolve_path(
        base_dir,
        _optional_string(section.get("output_dir"), "generation.output_dir") or DEFAULT_OUTPUT_DIR,
    )
    time_limit = _require_positive_int(
        section.get("time_limit_seconds", DEFAULT_TIME_LIMIT_SECONDS),
        "generation.time_limit_seconds",
    )
    leftover = _optional_string(
        section.get("leftover_root_package"), "generation.leftover_root_package"
    )
    if leftover is not None and (leftover in {".", ".."} or not _PATH_SEGMENT.fullmatch(leftover)):
        raise ConfigurationError(
            "generation.leftover_root_package must be a single directory name."
        )
    seed_value = _optional_string(section.get("repository_seed"), "generation.repository_seed")
    return GenerationSettings(
        output_dir=output_dir,
        time_limit_seconds=time_limit,
        permit_non_zero_exit=_optional_bool(
            section.get("permit_non_zero_exit"), "generation.permit_non_zero_exit", default=False
        ),
        clean_before_run=_optional_bool(
            section.get("clean_before_run"), "generation.clean_before_run", default=False
        ),
        leftover_root_package=leftover,
        generator_version=_optional_string(
            _stringify_version(section.get("generator_version")), "generation.generator_version"
        )
        or DEFAULT_GENERATOR_VERSION,
        java_executable=_optional_string(
            section.get("java_executable"), "generation.java_executable"
        )
        or DEFAULT_JAVA_EXECUTABLE,
        entry_point=_optional_string(section.get("entry_point"), "generation.entry_point")
        or DEFAULT_ENTRY_POINT,
        repository_seed=_resolve_path(base_dir, seed_value) if seed_value else None,
    )


def _parse_soundness_section(value: Any, base_dir: Path) -> SoundnessSettings:
    section = _optional_mapping(value, "soundness")
    reports_dir = _resolve_path(
        base_dir,
        _optional_string(section.get("surefire_reports_dir"), "soundness.surefire_reports_dir")
        or DEFAULT_SUREFIRE_REPORTS_DIR,
    )
    snapshot_dir = _resolve_path(
        base_dir,
        _optional_string(section.get("snapshot_dir"), "soundness.snapshot_dir")
        or DEFAULT_SNAPSHOT_DIR,
    )
    return SoundnessSettings(
        surefire_reports_dir=reports_dir,
        snapshot_dir=snapshot_dir,
        fail_on_divergence=_optional_bool(
            section.get("fail_on_divergence"), "soundness.fail_on_divergence", default=True
        ),
        forget_prior_executions=_optional_bool(
            section.get("forget_prior_executions"),
            "soundness.forget_prior_executions",
            default=False,
        ),
    )


def _stringify_version(value: Any) -> Any:
    # YAML reads an unquoted 4.3 as a float.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    if "\x00" in raw_path:
        raise ConfigurationError(f"Path contains a NUL byte: {raw_path!r}")
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigurationError(f"{field_name} must be a boolean.")


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
