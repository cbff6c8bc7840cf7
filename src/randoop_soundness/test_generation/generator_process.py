"""Supervised execution of the test generator process."""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as DrainTimeoutError
from pathlib import Path
from typing import Protocol

from randoop_soundness.classpath_resolution import join_classpath
from randoop_soundness.filesystem_support import delete_tree_quietly

from .generation_contracts import GenerationRequest, ProcessOutcome, ProcessStatus

GENERATOR_LOGGER_NAME = "randoop_soundness.generator"
DEFAULT_GRACE_SECONDS = 3
DEFAULT_DRAIN_SECONDS = 5


class GenerationProcessError(Exception):
    """Raised when the generator cannot be started or exits unsuccessfully."""

    def __init__(self, message: str, *, exit_code: int | None, command: Sequence[str]) -> None:
        self.exit_code = exit_code
        self.command = tuple(command)
        super().__init__(f"{message}\nCommand: {shlex.join(self.command)}")


class GenerationTimeoutError(GenerationProcessError):
    """Raised when the generator outlives its time budget and is terminated."""


class ProcessHandle(Protocol):
    """Subset of `subprocess.Popen` used while supervising the generator."""

    stdout: Iterable[str] | None
    returncode: int | None

    def wait(self, timeout: float | None = None) -> int: ...

    def kill(self) -> None: ...


ProcessSpawner = Callable[[Sequence[str], Path | None], ProcessHandle]


def spawn_process(command: Sequence[str], cwd: Path | None) -> ProcessHandle:
    """Start `command` in its own session with stderr merged into a line-buffered text pipe.

    The new session makes the child a process group leader, so a timeout can
    kill every descendant still holding the pipe.
    """
    return subprocess.Popen(  # pylint: disable=consider-using-with
        list(command),
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
        start_new_session=True,
    )


def build_generator_command(request: GenerationRequest) -> tuple[str, ...]:
    """Build the generator argument vector for `request`."""
    command = [
        request.java_executable,
        "-ea",
        "-classpath",
        join_classpath(request.classpath),
        request.entry_point,
        "gentests",
        f"--time-limit={request.time_budget_seconds}",
        "--debug-checks=true",
        f"--junit-package-name={request.package_name}",
        f"--junit-output-dir={request.output_dir}",
    ]
    command.extend(f"--testclass={class_name}" for class_name in request.test_classes)
    return tuple(command)


class GeneratorProcessRunner:  # pylint: disable=too-few-public-methods
    """Runs the generator with streamed output and an authoritative time budget."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        spawner: ProcessSpawner | None = None,
        grace_seconds: float = DEFAULT_GRACE_SECONDS,
        drain_seconds: float = DEFAULT_DRAIN_SECONDS,
    ) -> None:
        self._logger = logger or logging.getLogger(GENERATOR_LOGGER_NAME)
        self._spawner = spawner or spawn_process
        self._grace_seconds = grace_seconds
        self._drain_seconds = drain_seconds

    def run(self, request: GenerationRequest) -> ProcessOutcome:
        """Run the generator for `request` and apply the exit-status policy.

        The leftover directory named by the request is removed afterwards,
        whether or not the run succeeded.

        Raises:
          GenerationTimeoutError: If the process exceeded its budget and was killed.
          GenerationProcessError: If the process could not start or exited non-zero
            while non-zero exits are not permitted.
        """
        command = build_generator_command(request)
        try:
            outcome = self._execute(command, request)
        finally:
            if request.leftover_dir is not None:
                delete_tree_quietly(request.leftover_dir)
        return self._apply_exit_policy(outcome, request)

    def _execute(self, command: tuple[str, ...], request: GenerationRequest) -> ProcessOutcome:
        self._logger.info(
            "Generator started with time limit of %d seconds.", request.time_budget_seconds
        )
        try:
            process = self._spawner(command, request.working_dir)
        except OSError as exc:
            raise GenerationProcessError(
                f"Generator could not be started: {exc}", exit_code=None, command=command
            ) from exc

        timeout = request.time_budget_seconds + self._grace_seconds
        lines: list[str] = []
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            drained = executor.submit(self._drain_output, process, lines)
            try:
                process.wait(timeout=timeout)
                status = ProcessStatus.COMPLETED
            except subprocess.TimeoutExpired:
                self._logger.warning(
                    "Generator exceeded %s seconds; terminating process.", timeout
                )
                _kill_process_tree(process)
                process.wait()
                status = ProcessStatus.TIMED_OUT
            try:
                drained.result(timeout=self._drain_seconds)
            except DrainTimeoutError:
                self._logger.warning(
                    "Generator output still open %s seconds after exit; not waiting for it.",
                    self._drain_seconds,
                )
        finally:
            # The drain worker may stay blocked on a pipe held by a stray descendant.
            executor.shutdown(wait=False)

        exit_code = process.returncode
        if status is ProcessStatus.COMPLETED and exit_code is not None and exit_code < 0:
            status = ProcessStatus.KILLED
        return ProcessOutcome(
            status=status,
            exit_code=exit_code,
            output_lines=tuple(lines),
            command=command,
        )

    def _drain_output(self, process: ProcessHandle, lines: list[str]) -> None:
        stream = process.stdout
        if stream is None:
            return
        try:
            for raw_line in stream:
                line = raw_line.rstrip("\r\n")
                lines.append(line)
                self._logger.info(line)
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

    def _apply_exit_policy(
        self, outcome: ProcessOutcome, request: GenerationRequest
    ) -> ProcessOutcome:
        if outcome.status is ProcessStatus.TIMED_OUT:
            raise GenerationTimeoutError(
                f"Generator did not finish within {request.time_budget_seconds} seconds "
                "and was terminated.",
                exit_code=outcome.exit_code,
                command=outcome.command,
            )
        if outcome.succeeded:
            self._logger.info("Generator finished.")
            return outcome
        if not request.permit_non_zero_exit:
            raise GenerationProcessError(
                f"Test generation failure. Process exited with code {outcome.exit_code}",
                exit_code=outcome.exit_code,
                command=outcome.command,
            )
        self._logger.info("Generator did not finish. Exit code %s", outcome.exit_code)
        return outcome


def _kill_process_tree(process: ProcessHandle) -> None:
    """Kill the process group led by `process`, or just `process` when it leads none."""
    pid = getattr(process, "pid", None)
    if pid is not None and hasattr(os, "killpg"):
        try:
            os.killpg(pid, signal.SIGKILL)
            return
        except OSError:
            pass
    process.kill()
