"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from randoop_soundness.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from randoop_soundness.configuration.loader import ConfigurationError, load_configuration


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Configuration template" in scaffold
    assert "project:" in scaffold
    assert "package_name:" in scaffold
    assert "generation:" in scaffold
    assert "soundness:" in scaffold
    assert "leftover_root_package" in scaffold
    assert "fail_on_divergence" in scaffold
    assert "<REQUIRED>" in scaffold
    assert "<OPTIONAL>" in scaffold


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "randoop-soundness.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_unfilled_scaffold_is_rejected_by_loader(tmp_path: Path) -> None:
    output_path = write_placeholder_configuration(tmp_path / "randoop-soundness.yaml")

    with pytest.raises(ConfigurationError, match="package_name"):
        load_configuration(output_path)


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "randoop-soundness.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
