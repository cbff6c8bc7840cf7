"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace

import click

from randoop_soundness.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from randoop_soundness.soundness_checking import (
    SoundnessDivergenceError,
    execute_soundness_check,
)
from randoop_soundness.test_generation import GenerationRunError, execute_generation_run

_LOG_HANDLER_NAME = "randoop_soundness.cli"


class CliError(Exception):
    """Custom CLI error."""


class _EchoHandler(logging.Handler):
    """Writes log records through click so they follow the current stderr stream."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="randoop-soundness")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug details.")
def cli(verbose: bool) -> None:
    """Randoop test generation and regression-soundness checks."""
    _configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="gentests")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
@click.option("--skip", is_flag=True, default=False, help="Skip test generation.")
@click.option(
    "--forget-prior-executions",
    is_flag=True,
    default=False,
    help="Discard the checkpointed baseline before generating.",
)
def gentests(config_path: str, skip: bool, forget_prior_executions: bool) -> None:
    """Checkpoint prior reports and run the test generator."""
    configuration = _load(config_path, skip=skip)
    if forget_prior_executions:
        configuration = _with_cold_start(configuration)
    try:
        result = execute_generation_run(configuration)
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    if result is None:
        click.echo("skipped")
        return
    click.echo(f"generator exit code: {result.outcome.exit_code}")


@cli.command(name="test-soundness")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
@click.option("--skip", is_flag=True, default=False, help="Skip the soundness check.")
@click.option(
    "--fail-on-divergence/--no-fail-on-divergence",
    default=None,
    help="Override soundness.fail_on_divergence from the configuration.",
)
def test_soundness(config_path: str, skip: bool, fail_on_divergence: bool | None) -> None:
    """Compare current summary reports with the checkpointed baseline."""
    configuration = _load(config_path, skip=skip)
    try:
        verdict = execute_soundness_check(configuration, fail_on_divergence=fail_on_divergence)
    except SoundnessDivergenceError as exc:
        raise CliError(str(exc)) from exc
    if verdict is None:
        click.echo("skipped")
    elif not verdict.compared:
        click.echo("insufficient data: comparison skipped")
    elif verdict.diverged:
        click.echo("diverged")
    else:
        click.echo("sound")


def _load(config_path: str, *, skip: bool) -> Configuration:
    try:
        configuration = load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    if skip:
        configuration = replace(configuration, skip=True)
    return configuration


def _with_cold_start(configuration: Configuration) -> Configuration:
    soundness = replace(configuration.soundness, forget_prior_executions=True)
    return replace(configuration, soundness=soundness)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("randoop_soundness")
    for handler in list(logger.handlers):
        if handler.get_name() == _LOG_HANDLER_NAME:
            logger.removeHandler(handler)
    handler = _EchoHandler()
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
