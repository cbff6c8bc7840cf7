"""`gentests` use-case service."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from randoop_soundness.checkpointing import CheckpointError, checkpoint
from randoop_soundness.classpath_resolution import (
    ResolutionError,
    list_package_classes,
    locate_generator_jar,
    read_classpath_file,
    resolve_classpath,
)
from randoop_soundness.configuration import Configuration
from randoop_soundness.filesystem_support import delete_tree_quietly, find_generated_test_sources

from .generation_contracts import GenerationRequest, GenerationRunOutcome
from .generator_process import (
    GenerationProcessError,
    GeneratorProcessRunner,
    build_generator_command,
)

_LOGGER = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a `gentests` run cannot be completed."""


def execute_generation_run(
    configuration: Configuration,
    *,
    runner: GeneratorProcessRunner | None = None,
    seed_path: Path | None = None,
) -> GenerationRunOutcome | None:
    """Checkpoint prior reports, then generate tests for the configured package.

    Returns None when execution is skipped by configuration.
    """
    if configuration.skip:
        _LOGGER.info("Skipping test generation.")
        return None

    project = configuration.project
    generation = configuration.generation
    soundness = configuration.soundness

    seed = seed_path or generation.repository_seed or Path(__file__).resolve()
    generator_jar = locate_generator_jar(seed, generation.generator_version)
    if generator_jar is None:
        _LOGGER.warning(
            "Unable to find randoop-all-%s.jar in the local repository; "
            "the generator must already be on the classpath.",
            generation.generator_version,
        )
    try:
        dependencies = list(project.dependency_artifacts)
        if project.dependency_classpath_file is not None:
            dependencies.extend(read_classpath_file(project.dependency_classpath_file))
        classpath = resolve_classpath(project.classes_dir, dependencies, generator_jar)
    except ResolutionError as exc:
        raise GenerationRunError(str(exc)) from exc

    try:
        checkpointed = checkpoint(
            project.package_name,
            soundness.surefire_reports_dir,
            soundness.snapshot_dir,
            force_cold_start=soundness.forget_prior_executions,
        )
    except CheckpointError as exc:
        raise GenerationRunError(str(exc)) from exc

    removed = _remove_generated_test_sources(configuration) if generation.clean_before_run else ()

    test_classes = list_package_classes(classpath, project.package_name)
    for class_name in test_classes:
        _LOGGER.info("Add class %s", class_name)
    if not test_classes:
        _LOGGER.warning("No classes found in package %s", project.package_name)

    request = GenerationRequest(
        package_name=project.package_name,
        classes_dir=project.classes_dir,
        output_dir=generation.output_dir,
        time_budget_seconds=generation.time_limit_seconds,
        permit_non_zero_exit=generation.permit_non_zero_exit,
        classpath=classpath,
        test_classes=test_classes,
        java_executable=generation.java_executable,
        entry_point=generation.entry_point,
        working_dir=project.base_dir,
        leftover_dir=configuration.leftover_dir,
    )
    _LOGGER.info("Call outside the build: %s", shlex.join(build_generator_command(request)))

    try:
        outcome = (runner or GeneratorProcessRunner()).run(request)
    except GenerationProcessError as exc:
        raise GenerationRunError(str(exc)) from exc
    return GenerationRunOutcome(
        outcome=outcome,
        checkpointed=checkpointed,
        removed_test_sources=removed,
        generator_jar=generator_jar,
    )


def _remove_generated_test_sources(configuration: Configuration) -> tuple[Path, ...]:
    removed: list[Path] = []
    for directory in configuration.generated_test_dirs:
        for source in find_generated_test_sources(directory):
            if delete_tree_quietly(source):
                removed.append(source)
    if removed:
        _LOGGER.info("Removed %d previously generated test source(s).", len(removed))
    return tuple(removed)
