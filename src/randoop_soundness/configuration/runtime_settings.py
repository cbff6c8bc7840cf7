"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ProjectSettings:
    """Layout of the Java project under test."""

    base_dir: Path
    package_name: str
    classes_dir: Path
    dependency_artifacts: tuple[Path, ...]
    dependency_classpath_file: Path | None


@dataclass(frozen=True)
class GenerationSettings:  # pylint: disable=too-many-instance-attributes
    """Generator invocation settings."""

    output_dir: Path
    time_limit_seconds: int
    permit_non_zero_exit: bool
    clean_before_run: bool
    leftover_root_package: str | None
    generator_version: str
    java_executable: str
    entry_point: str
    repository_seed: Path | None


@dataclass(frozen=True)
class SoundnessSettings:
    """Soundness verification settings."""

    surefire_reports_dir: Path
    snapshot_dir: Path
    fail_on_divergence: bool
    forget_prior_executions: bool


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    project: ProjectSettings
    generation: GenerationSettings
    soundness: SoundnessSettings
    skip: bool = False

    @property
    def leftover_dir(self) -> Path | None:
        """Directory the generator fabricates at the project base, if configured."""
        if not self.generation.leftover_root_package:
            return None
        return self.project.base_dir / self.generation.leftover_root_package

    @property
    def generated_test_dirs(self) -> tuple[Path, ...]:
        """Package directories holding previously generated test sources."""
        package_path = Path(*self.project.package_name.split("."))
        candidates = (
            self.generation.output_dir / package_path,
            self.project.base_dir / "src" / "test" / "java" / package_path,
        )
        return tuple(dict.fromkeys(candidates))
