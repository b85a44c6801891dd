"""Generator configuration and settings.

Configuration is stored in ~/.config/wingen/config.toml:

    catalog_path = "/path/to/catalog.json"
    output_dir = "wingen-output"
    share_base_url = "https://example.github.io/wingen/"

    [options]
    silent_install = true
    continue_on_error = true
    include_ms_store_apps = false

A missing file means defaults; command-line flags override file values.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wingen.core.paths import get_config_path
from wingen.models.options import DEFAULT_GENERATOR_OPTIONS, GeneratorOptions

DEFAULT_OUTPUT_DIR = Path("wingen-output")
DEFAULT_SHARE_BASE_URL = "https://wingen.invalid/"


class OptionsConfig(BaseModel):
    """Default generator options in the configuration file."""

    model_config = ConfigDict(extra="forbid")

    silent_install: bool = DEFAULT_GENERATOR_OPTIONS.silent_install
    continue_on_error: bool = DEFAULT_GENERATOR_OPTIONS.continue_on_error
    include_ms_store_apps: bool = DEFAULT_GENERATOR_OPTIONS.include_ms_store_apps

    def to_options(self) -> GeneratorOptions:
        """Convert to GeneratorOptions."""
        return GeneratorOptions(
            silent_install=self.silent_install,
            continue_on_error=self.continue_on_error,
            include_ms_store_apps=self.include_ms_store_apps,
        )


class GeneratorConfig(BaseModel):
    """Configuration for wingen.

    Attributes:
        catalog_path: Catalog file. If None, the user or bundled catalog is used.
        output_dir: Directory where ``generate`` writes artifacts.
        share_base_url: Web front end address used to build share URLs.
        options: Default generator options.
    """

    model_config = ConfigDict(extra="forbid")

    catalog_path: Annotated[Path | None, Field(description="Catalog JSON file")] = None
    output_dir: Annotated[Path, Field(description="Artifact output directory")] = (
        DEFAULT_OUTPUT_DIR
    )
    share_base_url: Annotated[
        str, Field(min_length=1, description="Base URL for share links")
    ] = DEFAULT_SHARE_BASE_URL
    options: Annotated[
        OptionsConfig,
        Field(default_factory=OptionsConfig, description="Default generator options"),
    ]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated GeneratorConfig; defaults when the file doesn't exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return GeneratorConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: GeneratorConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The GeneratorConfig to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: GeneratorConfig) -> dict[str, Any]:
    """Convert GeneratorConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset catalog path is omitted.
    """
    result: dict[str, Any] = {
        "output_dir": str(config.output_dir),
        "share_base_url": config.share_base_url,
        "options": config.options.model_dump(),
    }
    if config.catalog_path is not None:
        result["catalog_path"] = str(config.catalog_path)
    return result
