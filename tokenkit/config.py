"""Configuration models and loading.

Settings are merged from, lowest to highest precedence:
1. Defaults
2. ``tokenkit.config.json`` in the project directory (or an explicit file)
3. Environment variables (``TOKENKIT_*``)
4. Explicit overrides (CLI flags)
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .exporters import ExportOptions
from .models import AliasMode, ColorFormat, ExportFormat, Mode
from .tokens_logging import get_logger

logger = get_logger()

CONFIG_FILENAME = "tokenkit.config.json"

# Environment variable -> (section, field)
ENV_VARS = {
    "TOKENKIT_FORMAT": ("export", "format"),
    "TOKENKIT_ALIAS_MODE": ("export", "alias_mode"),
    "TOKENKIT_COLOR_FORMAT": ("export", "color_format"),
    "TOKENKIT_UNIT": ("export", "unit_format"),
    "TOKENKIT_BASE_FONT_SIZE": ("export", "base_font_size"),
    "TOKENKIT_LOG_LEVEL": ("logging", "level"),
    "TOKENKIT_STORE": ("storage", "path"),
}


class ExportSettings(BaseModel):
    """Global export settings."""

    format: str = Field(default="css", description="css, scss, json or dtcg")
    alias_mode: str = Field(default="resolved", description="resolved or alias")
    color_format: str = Field(default="hex", description="Color output format")
    unit_format: str = Field(default="px", description="px, rem, em, none or a raw unit")
    base_font_size: float = Field(default=16.0, gt=0, description="Base size for rem/em")
    unit_per_variable: dict[str, str] = Field(
        default_factory=dict, description="Unit overrides keyed by variable id"
    )
    modes: list[str] = Field(
        default_factory=list, description="Mode names to export; empty exports all"
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        allowed = [f.value for f in ExportFormat]
        if v not in allowed:
            raise ValueError(f"format must be one of {allowed}")
        return v

    @field_validator("alias_mode")
    @classmethod
    def validate_alias_mode(cls, v: str) -> str:
        allowed = [m.value for m in AliasMode]
        if v not in allowed:
            raise ValueError(f"alias_mode must be one of {allowed}")
        return v

    @field_validator("color_format")
    @classmethod
    def validate_color_format(cls, v: str) -> str:
        allowed = [c.value for c in ColorFormat]
        if v not in allowed:
            raise ValueError(f"color_format must be one of {allowed}")
        return v

    @field_validator("unit_format")
    @classmethod
    def validate_unit(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("unit_format cannot be empty")
        return v.strip()

    def select_modes(self, modes: list[Mode]) -> list[Mode]:
        """Filter a collection's modes by the configured names."""
        if not self.modes:
            return list(modes)
        wanted = {name.lower() for name in self.modes}
        return [m for m in modes if m.name.lower() in wanted]

    def to_options(self, modes: list[Mode]) -> ExportOptions:
        """Build renderer options for a collection's modes."""
        return ExportOptions(
            format=ExportFormat(self.format),
            modes=self.select_modes(modes),
            alias_mode=AliasMode(self.alias_mode),
            color_format=self.color_format,
            unit_format=self.unit_format,
            base_font_size=self.base_font_size,
            unit_per_variable=dict(self.unit_per_variable),
        )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    format: str = Field(default="text", description="File log format: text or json")
    log_file: str | None = Field(default=None, description="Path to log file")
    rotation_count: int = Field(default=3, ge=1, le=10)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError("level must be DEBUG, INFO, WARNING or ERROR")
        return level


class StorageSettings(BaseModel):
    """Token store location, relative to the project directory."""

    path: str = Field(default=".tokenkit/store.json")


class TokenKitConfig(BaseModel):
    """Complete tokenkit configuration."""

    version: str = Field(default="1.0")
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    def store_path(self, project_path: Path) -> Path:
        """Absolute path of the token store."""
        path = Path(self.storage.path)
        return path if path.is_absolute() else project_path / path


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Loads ``TokenKitConfig`` from file, environment and overrides."""

    def __init__(self, project_path: Path | None = None, config_file: Path | None = None):
        self.project_path = Path(project_path) if project_path else Path.cwd()
        self.config_file = (
            Path(config_file) if config_file else self.project_path / CONFIG_FILENAME
        )

    def _load_file(self) -> dict[str, Any]:
        if not self.config_file.exists():
            return {}
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read config file: {e}", config_file=str(self.config_file)
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                config_file=str(self.config_file),
            )
        logger.debug(f"Loaded config from {self.config_file}")
        return data

    def _load_env(self) -> dict[str, Any]:
        env_config: dict[str, Any] = {}
        for env_var, (section, key) in ENV_VARS.items():
            value = os.environ.get(env_var)
            if value is not None:
                env_config.setdefault(section, {})[key] = value
        if env_config:
            logger.debug(f"Applied {sum(len(v) for v in env_config.values())} environment variables")
        return env_config

    def load(self, **export_overrides: Any) -> TokenKitConfig:
        """Load the merged configuration.

        Args:
            **export_overrides: Export settings that win over every other
                source; ``None`` values are ignored.

        Raises:
            ConfigurationError: If the merged settings are invalid.
        """
        config_dict = _deep_merge(self._load_file(), self._load_env())
        overrides = {k: v for k, v in export_overrides.items() if v is not None}
        if overrides:
            config_dict = _deep_merge(config_dict, {"export": overrides})

        try:
            return TokenKitConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", config_file=str(self.config_file)
            ) from e


def load_config(
    project_path: Path | None = None,
    config_file: Path | None = None,
    **export_overrides: Any,
) -> TokenKitConfig:
    """Convenience wrapper around ``ConfigLoader``."""
    return ConfigLoader(project_path, config_file).load(**export_overrides)
