"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, build_configuration, load_configuration
from .runtime_settings import (
    Configuration,
    GenerationSettings,
    ProjectSettings,
    SoundnessSettings,
)

__all__ = [
    "Configuration",
    "GenerationSettings",
    "ProjectSettings",
    "SoundnessSettings",
    "ConfigurationError",
    "build_configuration",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
