"""Test generation domain exports."""

from .generation_contracts import (
    GenerationRequest,
    GenerationRunOutcome,
    ProcessOutcome,
    ProcessStatus,
)
from .generation_use_case import GenerationRunError, execute_generation_run
from .generator_process import (
    GenerationProcessError,
    GenerationTimeoutError,
    GeneratorProcessRunner,
    build_generator_command,
    spawn_process,
)

__all__ = [
    "GenerationRequest",
    "GenerationRunOutcome",
    "ProcessOutcome",
    "ProcessStatus",
    "GenerationRunError",
    "execute_generation_run",
    "GenerationProcessError",
    "GenerationTimeoutError",
    "GeneratorProcessRunner",
    "build_generator_command",
    "spawn_process",
]
