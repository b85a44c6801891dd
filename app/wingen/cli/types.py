"""Shared types and utilities for CLI commands.

This module provides the option flags and the selection loading used by
several command modules to avoid code duplication.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from wingen.core.catalog import CatalogError, load_catalog, select_records
from wingen.core.codec import SelectionCodecError, parse_from_text, parse_selection_json
from wingen.core.config import ConfigError, GeneratorConfig, load_config
from wingen.models.options import GeneratorOptions
from wingen.models.package import PackageRecord
from wingen.models.selection import SelectionPayload
from wingen.utils.formatting import print_error, print_warning

PackageIdsArgument = Annotated[
    list[str] | None,
    typer.Argument(help="Catalog ids of the apps to install.", show_default=False),
]

FromFileOption = Annotated[
    Path | None,
    typer.Option(
        "--from",
        "-F",
        help="Read the selection from a selection JSON file.",
    ),
]

ShareInputOption = Annotated[
    str | None,
    typer.Option(
        "--share",
        "-S",
        help="Read the selection from a share token or share URL.",
    ),
]

SilentOption = Annotated[
    bool | None,
    typer.Option(
        "--silent/--no-silent",
        help="Pass --silent to winget for packages that support it.",
        show_default=False,
    ),
]

ContinueOnErrorOption = Annotated[
    bool | None,
    typer.Option(
        "--continue-on-error/--stop-on-error",
        help="Keep installing after a failed package.",
        show_default=False,
    ),
]

IncludeMsStoreOption = Annotated[
    bool | None,
    typer.Option(
        "--include-msstore/--exclude-msstore",
        help="Install Microsoft Store packages through winget.",
        show_default=False,
    ),
]


@dataclass(frozen=True, slots=True)
class CliSelection:
    """A selection ready for resolution.

    Attributes:
        records: Catalog records for the selected ids, in selection order.
        options: Generator options after applying config and flags.
        missing: Selected ids that are not in the catalog.
    """

    records: list[PackageRecord]
    options: GeneratorOptions
    missing: list[str]


def get_config(ctx: typer.Context) -> GeneratorConfig:
    """Load the configuration named by the global --config option.

    Exits with code 1 if the file is invalid.
    """
    obj = ctx.obj or {}
    try:
        return load_config(obj.get("config_path"))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_catalog(ctx: typer.Context, config: GeneratorConfig) -> list[PackageRecord]:
    """Load the catalog from --catalog, the config file or the default location.

    Exits with code 1 if the catalog cannot be loaded.
    """
    obj = ctx.obj or {}
    path = obj.get("catalog_path") or config.catalog_path
    try:
        return load_catalog(path)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def merge_options(
    base: GeneratorOptions,
    silent: bool | None = None,
    continue_on_error: bool | None = None,
    include_msstore: bool | None = None,
) -> GeneratorOptions:
    """Apply explicitly given flags on top of base options.

    Args:
        base: Options from the selection file or the configuration.
        silent: --silent/--no-silent, None when not given.
        continue_on_error: --continue-on-error/--stop-on-error, None when not given.
        include_msstore: --include-msstore/--exclude-msstore, None when not given.

    Returns:
        New GeneratorOptions.
    """
    return GeneratorOptions(
        silent_install=base.silent_install if silent is None else silent,
        continue_on_error=(
            base.continue_on_error if continue_on_error is None else continue_on_error
        ),
        include_ms_store_apps=(
            base.include_ms_store_apps if include_msstore is None else include_msstore
        ),
    )


def read_payload(from_path: Path | None, share_input: str | None) -> SelectionPayload | None:
    """Read a selection payload from a file or share input.

    Args:
        from_path: Selection JSON file, or None.
        share_input: Share token or URL, or None.

    Returns:
        The payload, or None if neither source was given.

    Raises:
        typer.Exit: If the source cannot be read or decoded.
    """
    if from_path is not None:
        try:
            text = from_path.read_text(encoding="utf-8")
        except OSError as e:
            print_error(f"Failed to read selection file: {e}")
            raise typer.Exit(code=1) from e
        try:
            return parse_selection_json(text)
        except SelectionCodecError as e:
            print_error(f"{from_path}: {e}")
            raise typer.Exit(code=1) from e

    if share_input is not None:
        try:
            return parse_from_text(share_input)
        except SelectionCodecError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    return None


def gather_selection(
    ctx: typer.Context,
    ids: list[str] | None,
    from_path: Path | None,
    share_input: str | None,
    silent: bool | None = None,
    continue_on_error: bool | None = None,
    include_msstore: bool | None = None,
) -> CliSelection:
    """Collect the selection for plan and generate commands.

    Exactly one selection source is accepted: ids on the command line, a
    selection file or a share input. Options come from the selection
    payload when there is one, otherwise from the configuration; explicit
    flags override both.

    Raises:
        typer.Exit: On conflicting or missing sources and load failures.
    """
    sources = sum(1 for given in (ids, from_path, share_input) if given)
    if sources == 0:
        print_error("No apps selected. Pass app ids, --from FILE or --share TOKEN.")
        raise typer.Exit(code=1)
    if sources > 1:
        print_error("Use only one of: app ids, --from, --share.")
        raise typer.Exit(code=1)

    config = get_config(ctx)
    payload = read_payload(from_path, share_input)

    if payload is not None:
        selected_ids = list(payload.selected_ids)
        base_options = payload.options
    else:
        selected_ids = list(ids or [])
        base_options = config.options.to_options()

    options = merge_options(base_options, silent, continue_on_error, include_msstore)
    catalog = get_catalog(ctx, config)
    records, missing = select_records(catalog, selected_ids)

    for package_id in missing:
        print_warning(f"Unknown app id '{package_id}' ignored.")

    return CliSelection(records=records, options=options, missing=missing)
