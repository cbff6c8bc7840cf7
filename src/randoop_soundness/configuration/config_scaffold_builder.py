"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "randoop-soundness.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for randoop-soundness.
# Replace every <REQUIRED> placeholder before running gentests or test-soundness.
# Commented keys show their defaults; relative paths resolve against project.base_dir.

project:
  # Java package whose classes are handed to the generator.
  package_name: "<REQUIRED>"
  # base_dir: "."
  # classes_dir: "target/classes"
  # Dependency jars, in class loading order.
  # dependency_artifacts:
  #   - "<OPTIONAL>"
  # Classpath file written by `mvn dependency:build-classpath -Dmdep.outputFile=...`.
  # dependency_classpath_file: "<OPTIONAL>"

generation:
  # output_dir: "target/generated-test-sources/java"
  # time_limit_seconds: 60
  # permit_non_zero_exit: false
  # Delete previously generated RegressionTest/ErrorTest sources before a run.
  # clean_before_run: false
  # Directory the generator leaves at the project base; removed after each run.
  # leftover_root_package: "<OPTIONAL>"
  # generator_version: "4.3.2"
  # java_executable: "java"
  # entry_point: "randoop.main.Main"
  # Start path for the upward search of the local `repository` directory.
  # repository_seed: "<OPTIONAL>"

soundness:
  # surefire_reports_dir: "target/surefire-reports"
  # snapshot_dir: ".surefire.d"
  # fail_on_divergence: true
  # Discard the checkpointed baseline before the next generation run.
  # forget_prior_executions: false

# skip: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
