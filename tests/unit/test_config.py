"""Unit tests for configuration loading."""

import json
from pathlib import Path

import pytest

from tokenkit.config import (
    CONFIG_FILENAME,
    ConfigLoader,
    ExportSettings,
    LoggingSettings,
    TokenKitConfig,
    load_config,
)
from tokenkit.errors import ConfigurationError
from tokenkit.models import AliasMode, ExportFormat, Mode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove TOKENKIT_* variables from the environment."""
    for name in (
        "TOKENKIT_FORMAT",
        "TOKENKIT_ALIAS_MODE",
        "TOKENKIT_COLOR_FORMAT",
        "TOKENKIT_UNIT",
        "TOKENKIT_BASE_FONT_SIZE",
        "TOKENKIT_LOG_LEVEL",
        "TOKENKIT_STORE",
    ):
        monkeypatch.delenv(name, raising=False)


def write_config(project: Path, data: dict) -> Path:
    path = project / CONFIG_FILENAME
    path.write_text(json.dumps(data))
    return path


class TestExportSettings:
    """Tests for ExportSettings validation."""

    def test_defaults(self):
        settings = ExportSettings()
        assert settings.format == "css"
        assert settings.alias_mode == "resolved"
        assert settings.color_format == "hex"
        assert settings.unit_format == "px"
        assert settings.base_font_size == 16.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("format", "xml"),
            ("alias_mode", "literal"),
            ("color_format", "cmyk"),
            ("unit_format", "  "),
            ("base_font_size", 0),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            ExportSettings(**{field: value})

    def test_select_modes_case_insensitive(self):
        settings = ExportSettings(modes=["dark"])
        modes = [Mode("m1", "Light"), Mode("m2", "Dark")]
        assert settings.select_modes(modes) == [Mode("m2", "Dark")]

    def test_select_all_modes_by_default(self):
        modes = [Mode("m1", "Light"), Mode("m2", "Dark")]
        assert ExportSettings().select_modes(modes) == modes

    def test_to_options(self):
        settings = ExportSettings(
            format="dtcg",
            alias_mode="alias",
            unit_format="rem",
            base_font_size=10,
            unit_per_variable={"v1": "%"},
        )
        options = settings.to_options([Mode("m1", "Light")])
        assert options.format == ExportFormat.DTCG
        assert options.alias_mode == AliasMode.ALIAS
        assert options.unit_format == "rem"
        assert options.base_font_size == 10
        assert options.unit_per_variable == {"v1": "%"}
        assert options.modes == [Mode("m1", "Light")]


class TestLoggingSettings:
    def test_level_uppercased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            LoggingSettings(level="verbose")


class TestTokenKitConfig:
    def test_store_path_relative(self, tmp_path: Path):
        config = TokenKitConfig()
        assert config.store_path(tmp_path) == tmp_path / ".tokenkit" / "store.json"

    def test_store_path_absolute(self, tmp_path: Path):
        absolute = tmp_path / "elsewhere.json"
        config = TokenKitConfig(storage={"path": str(absolute)})
        assert config.store_path(Path("/ignored")) == absolute


class TestConfigLoader:
    """Tests for merging file, environment and overrides."""

    def test_defaults_without_file(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config.export.format == "css"
        assert config.logging.level == "INFO"

    def test_file_values(self, tmp_path: Path):
        write_config(tmp_path, {"export": {"format": "scss", "unit_format": "rem"}})
        config = load_config(tmp_path)
        assert config.export.format == "scss"
        assert config.export.unit_format == "rem"
        assert config.export.color_format == "hex"

    def test_explicit_config_file(self, tmp_path: Path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"export": {"color_format": "oklch"}}))
        config = ConfigLoader(tmp_path, path).load()
        assert config.export.color_format == "oklch"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        write_config(tmp_path, {"export": {"format": "scss"}})
        monkeypatch.setenv("TOKENKIT_FORMAT", "json")
        monkeypatch.setenv("TOKENKIT_BASE_FONT_SIZE", "10")
        monkeypatch.setenv("TOKENKIT_LOG_LEVEL", "warning")
        config = load_config(tmp_path)
        assert config.export.format == "json"
        assert config.export.base_font_size == 10.0
        assert config.logging.level == "WARNING"

    def test_overrides_win(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TOKENKIT_FORMAT", "json")
        config = load_config(tmp_path, format="dtcg", alias_mode=None)
        assert config.export.format == "dtcg"
        assert config.export.alias_mode == "resolved"

    def test_invalid_values_raise_configuration_error(self, tmp_path: Path):
        write_config(tmp_path, {"export": {"format": "xml"}})
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.details == {"config_file": str(tmp_path / CONFIG_FILENAME)}

    def test_invalid_json(self, tmp_path: Path):
        (tmp_path / CONFIG_FILENAME).write_text("{broken")
        with pytest.raises(ConfigurationError, match="Cannot read config file"):
            load_config(tmp_path)

    def test_non_object_json(self, tmp_path: Path):
        write_config(tmp_path, ["css"])
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_config(tmp_path)
