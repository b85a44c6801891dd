"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from wingen.models.options import DEFAULT_GENERATOR_OPTIONS, GeneratorOptions
from wingen.models.package import PackageRecord


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


def make_record(
    package_id: str,
    name: str | None = None,
    *,
    winget: dict[str, Any] | None = None,
    choco: dict[str, Any] | None = None,
    scoop: dict[str, Any] | None = None,
    needs_verification: bool = False,
    **extra: Any,
) -> PackageRecord:
    """Build a PackageRecord from camelCase provider dictionaries."""
    providers: dict[str, Any] = {}
    if winget is not None:
        providers["winget"] = winget
    if choco is not None:
        providers["choco"] = choco
    if scoop is not None:
        providers["scoop"] = scoop
    return PackageRecord.model_validate(
        {
            "id": package_id,
            "name": name or package_id,
            "providers": providers,
            "needsVerification": needs_verification,
            **extra,
        }
    )


@pytest.fixture
def record_factory() -> Callable[..., PackageRecord]:
    """Factory building package records from camelCase provider mappings."""
    return make_record


@pytest.fixture
def default_options() -> GeneratorOptions:
    """Default generator options (silent, continue on error, no msstore)."""
    return DEFAULT_GENERATOR_OPTIONS


@pytest.fixture
def vscode_record() -> PackageRecord:
    """winget-only record with a silent-capable installer."""
    return make_record(
        "vscode",
        "Visual Studio Code",
        winget={
            "packageId": "Microsoft.VisualStudioCode",
            "source": "winget",
            "supportsSilent": True,
        },
    )


@pytest.fixture
def spotify_record() -> PackageRecord:
    """msstore winget record with a Chocolatey fallback."""
    return make_record(
        "spotify",
        "Spotify",
        winget={"packageId": "9NCBCSZSJRSB", "source": "msstore", "supportsSilent": False},
        choco={"packageId": "spotify"},
    )


@pytest.fixture
def whatsapp_record() -> PackageRecord:
    """msstore winget record without any fallback."""
    return make_record(
        "whatsapp",
        "WhatsApp",
        winget={"packageId": "9NKSQGP7F2NH", "source": "msstore"},
    )


@pytest.fixture
def choco_only_record() -> PackageRecord:
    """Record only available from Chocolatey."""
    return make_record("choco-app", "Choco App", choco={"packageId": "vendor-choco-only"})


@pytest.fixture
def scoop_only_record() -> PackageRecord:
    """Record only available from Scoop in the extras bucket."""
    return make_record(
        "scoop-app",
        "Scoop App",
        scoop={"packageId": "vendor-scoop-only", "bucket": "extras"},
    )


@pytest.fixture
def mixed_records(
    vscode_record: PackageRecord,
    spotify_record: PackageRecord,
    whatsapp_record: PackageRecord,
    choco_only_record: PackageRecord,
    scoop_only_record: PackageRecord,
) -> list[PackageRecord]:
    """A selection touching every provider and the msstore skip path."""
    return [
        vscode_record,
        spotify_record,
        whatsapp_record,
        choco_only_record,
        scoop_only_record,
    ]


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Small catalog JSON file for CLI tests."""
    path = tmp_path / "catalog.json"
    path.write_text(
        """[
  {"id": "vscode", "name": "Visual Studio Code", "category": "Development",
   "tags": ["editor", "popular"], "popularity": 98, "addedAt": "2024-01-10",
   "providers": {"winget": {"packageId": "Microsoft.VisualStudioCode"},
                 "choco": {"packageId": "vscode"}}},
  {"id": "spotify", "name": "Spotify", "category": "Media", "popularity": 88,
   "providers": {"winget": {"packageId": "9NCBCSZSJRSB", "source": "msstore",
                            "supportsSilent": false},
                 "choco": {"packageId": "spotify"}}},
  {"id": "whatsapp", "name": "WhatsApp", "category": "Communication", "popularity": 75,
   "providers": {"winget": {"packageId": "9NKSQGP7F2NH", "source": "msstore"}}},
  {"id": "neovim", "name": "Neovim", "category": "Development", "popularity": 70,
   "tags": ["editor"], "addedAt": "2024-06-01",
   "providers": {"scoop": {"packageId": "neovim", "bucket": "extras"}}},
  {"id": "fonts", "name": "Nerd Font", "category": "Fonts", "popularity": 40,
   "needsVerification": true, "addedAt": "2024-03-05",
   "providers": {"scoop": {"packageId": "JetBrainsMono-NF", "bucket": "nerd-fonts"}}}
]
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a configuration file (not created)."""
    return tmp_path / "config.toml"


@pytest.fixture
def cli_args(catalog_file: Path, config_file: Path) -> list[str]:
    """Global CLI options pointing at the test catalog and config."""
    return ["--catalog", str(catalog_file), "--config", str(config_file)]
