"""XDG-compliant path management for wingen.

XDG defaults:
- Config: ~/.config/wingen/
"""

import os
from importlib import resources
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "wingen"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/wingen/ (or XDG_CONFIG_HOME/wingen/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the generator configuration file path.

    Returns:
        Path to ~/.config/wingen/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_catalog_path() -> Path:
    """Get the user catalog file path.

    Returns:
        Path to ~/.config/wingen/catalog.json.
    """
    return get_config_dir() / "catalog.json"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/wingen/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_bundled_data_path(name: str) -> Path:
    """Get the path of a data file shipped inside the package.

    Args:
        name: File name under wingen/data (e.g., "catalog.json").
    """
    return Path(str(resources.files("wingen.data").joinpath(name)))


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
