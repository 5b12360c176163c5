"""Process-wide services: telemetry and configuration."""

from . import telemetry
from .config import (
    AIConfig,
    Config,
    ConfigError,
    EditorConfig,
    ThemeConfig,
    load_config,
    save_config,
)

__all__ = [
    "telemetry",
    "AIConfig",
    "Config",
    "ConfigError",
    "EditorConfig",
    "ThemeConfig",
    "load_config",
    "save_config",
]
