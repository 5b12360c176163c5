"""YAML-backed editor configuration with ``QUILL_`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from . import telemetry

ENV_PREFIX = telemetry.ENV_PREFIX
CONFIG_FILENAME = ".quill.yaml"
PROVIDERS = ("ollama", "openai", "openrouter")


class ConfigError(RuntimeError):
    """Raised when the config file cannot be parsed or holds invalid values."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(slots=True)
class AIConfig:
    enabled: bool = False
    provider: str = "ollama"  # ollama, openai, openrouter
    api_key: str = ""
    base_url: str = "http://localhost:11434"
    model: str = "llama3.2"
    timeout: float = 60.0


@dataclass(slots=True)
class ThemeConfig:
    current: str = "dark"


@dataclass(slots=True)
class EditorConfig:
    tab_size: int = 4
    show_line_numbers: bool = True
    auto_indent: bool = True
    undo_limit: int = 50
    prompt_history_limit: int = 20


@dataclass(slots=True)
class Config:
    ai: AIConfig = field(default_factory=AIConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def default_config_path() -> Path:
    override = os.getenv(f"{ENV_PREFIX}CONFIG")
    if override:
        return Path(override).expanduser()
    try:
        return Path.home() / CONFIG_FILENAME
    except RuntimeError:
        return Path(CONFIG_FILENAME)


def _section(cls: type, raw: Any, name: str, path: Path | None) -> Any:
    if raw is None:
        return cls()
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Section '{name}' must be a mapping", path=path)
    known = {f.name: f for f in fields(cls)}
    values = {}
    for key, value in raw.items():
        if key not in known:
            continue
        default = getattr(cls(), key)
        if isinstance(default, bool):
            values[key] = _coerce_bool(value)
        elif isinstance(default, (int, float)) and not isinstance(value, (int, float)):
            try:
                values[key] = type(default)(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(
                    f"Invalid value for {name}.{key}: {value!r}", path=path
                ) from exc
        elif value is None:
            values[key] = ""
        elif isinstance(value, (Mapping, list)):
            raise ConfigError(f"Invalid value for {name}.{key}: {value!r}", path=path)
        else:
            values[key] = str(value)
    return cls(**values)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def config_from_mapping(data: Mapping[str, Any], *, path: Path | None = None) -> Config:
    config = Config(
        ai=_section(AIConfig, data.get("ai"), "ai", path),
        theme=_section(ThemeConfig, data.get("theme"), "theme", path),
        editor=_section(EditorConfig, data.get("editor"), "editor", path),
    )
    _validate(config, path)
    return config


def _validate(config: Config, path: Path | None) -> None:
    if config.ai.provider not in PROVIDERS:
        raise ConfigError(
            f"unsupported AI provider: {config.ai.provider}", path=path
        )
    if config.editor.undo_limit < 1:
        raise ConfigError("editor.undo_limit must be at least 1", path=path)


def apply_env_overrides(config: Config) -> Config:
    ai = config.ai
    enabled = os.getenv(f"{ENV_PREFIX}AI_ENABLED")
    if enabled is not None:
        ai.enabled = _coerce_bool(enabled)
    for attr in ("provider", "api_key", "base_url", "model"):
        value = os.getenv(f"{ENV_PREFIX}AI_{attr.upper()}")
        if value:
            setattr(ai, attr, value)
    _validate(config, None)
    return config


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    target = path or default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        yaml.safe_dump(config.to_dict(), sort_keys=False), encoding="utf-8"
    )
    return target


def load_config(path: Optional[Path] = None) -> Config:
    """Load the config file, writing defaults first when it does not exist."""

    target = path or default_config_path()
    if not target.exists():
        try:
            save_config(Config(), target)
        except OSError as exc:
            telemetry.record_event(
                "config.write_default_failed",
                level="warning",
                data={"path": str(target), "error": str(exc)},
            )
            return apply_env_overrides(Config())

    try:
        raw = target.read_text(encoding="utf-8")
    except OSError as exc:
        telemetry.record_event(
            "config.read_failed",
            level="warning",
            data={"path": str(target), "error": str(exc)},
        )
        return apply_env_overrides(Config())

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {target}: {exc}", path=target) from exc
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"{target} must contain a mapping", path=target)

    config = apply_env_overrides(config_from_mapping(data, path=target))
    telemetry.record_event(
        "config.loaded",
        data={"path": str(target), "provider": config.ai.provider},
    )
    return config


__all__ = [
    "AIConfig",
    "Config",
    "ConfigError",
    "EditorConfig",
    "PROVIDERS",
    "ThemeConfig",
    "apply_env_overrides",
    "config_from_mapping",
    "default_config_path",
    "load_config",
    "save_config",
]
