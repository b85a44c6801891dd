"""Unit tests for generator configuration."""

import tomllib
from pathlib import Path

import pytest
from wingen.core.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SHARE_BASE_URL,
    ConfigError,
    ConfigParseError,
    GeneratorConfig,
    OptionsConfig,
    load_config,
    save_config,
)
from wingen.models.options import DEFAULT_GENERATOR_OPTIONS


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing file yields the default configuration."""
        config = load_config(tmp_path / "config.toml")
        assert config.catalog_path is None
        assert config.output_dir == DEFAULT_OUTPUT_DIR
        assert config.share_base_url == DEFAULT_SHARE_BASE_URL
        assert config.options.to_options() == DEFAULT_GENERATOR_OPTIONS

    def test_default_path_uses_xdg(self, isolated_config_home: Path) -> None:
        """Without a path the XDG config file is read."""
        path = isolated_config_home / "wingen" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text('output_dir = "out"\n')
        assert load_config().output_dir == Path("out")

    def test_partial_options(self, tmp_path: Path) -> None:
        """Unspecified options keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text("[options]\ninclude_ms_store_apps = true\n")
        options = load_config(path).options.to_options()
        assert options.include_ms_store_apps is True
        assert options.silent_install is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("not = [valid")
        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys are rejected."""
        path = tmp_path / "config.toml"
        path.write_text('colour = "blue"\n')
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved configuration loads back unchanged."""
        config = GeneratorConfig(
            catalog_path=tmp_path / "catalog.json",
            output_dir=Path("dist"),
            share_base_url="https://example.org/wingen/",
            options=OptionsConfig(silent_install=False),
        )
        path = save_config(config, tmp_path / "nested" / "config.toml")
        assert load_config(path) == config

    def test_omits_unset_catalog_path(self, tmp_path: Path) -> None:
        """TOML has no null, so an unset catalog path is left out."""
        path = save_config(GeneratorConfig(), tmp_path / "config.toml")
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert "catalog_path" not in data
        assert data["options"] == {
            "silent_install": True,
            "continue_on_error": True,
            "include_ms_store_apps": False,
        }

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the config file."""
        save_config(GeneratorConfig(), tmp_path / "config.toml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
