"""Test generation entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ProcessStatus(str, Enum):
    """How the generator process ended."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    KILLED = "killed"


@dataclass(frozen=True)
class GenerationRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for one generator invocation."""

    package_name: str
    classes_dir: Path
    output_dir: Path
    time_budget_seconds: int
    permit_non_zero_exit: bool
    classpath: tuple[Path, ...]
    test_classes: tuple[str, ...] = ()
    java_executable: str = "java"
    entry_point: str = "randoop.main.Main"
    working_dir: Path | None = None
    leftover_dir: Path | None = None


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of running the generator process once."""

    status: ProcessStatus
    exit_code: int | None
    output_lines: tuple[str, ...]
    command: tuple[str, ...]

    @property
    def completed_within_budget(self) -> bool:
        return self.status is not ProcessStatus.TIMED_OUT

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessStatus.COMPLETED and self.exit_code == 0


@dataclass(frozen=True)
class GenerationRunOutcome:
    """Output contract for one completed `gentests` run."""

    outcome: ProcessOutcome
    checkpointed: tuple[Path, ...]
    removed_test_sources: tuple[Path, ...]
    generator_jar: Path | None
