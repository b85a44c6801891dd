"""Share command implementation.

Encodes selections as share tokens and URLs, and decodes them back.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from wingen.cli.types import (
    ContinueOnErrorOption,
    FromFileOption,
    IncludeMsStoreOption,
    PackageIdsArgument,
    SilentOption,
    get_config,
    merge_options,
    read_payload,
)
from wingen.core.codec import (
    SelectionCodecError,
    encode_share_payload,
    parse_from_text,
    share_url_for_token,
)
from wingen.models.selection import SelectionPayload
from wingen.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Encode and decode shareable selection links.",
    no_args_is_help=True,
)


@app.command()
def encode(
    ctx: typer.Context,
    ids: PackageIdsArgument = None,
    from_path: FromFileOption = None,
    base_url: Annotated[
        str | None,
        typer.Option(
            "--base-url",
            help="Web front end address (default from config).",
        ),
    ] = None,
    token_only: Annotated[
        bool,
        typer.Option(
            "--token-only",
            "-t",
            help="Print only the token.",
        ),
    ] = False,
    silent: SilentOption = None,
    continue_on_error: ContinueOnErrorOption = None,
    include_msstore: IncludeMsStoreOption = None,
) -> None:
    """Encode a selection into a share token and URL.

    Examples:
        wingen share encode vlc firefox          # Token and URL for two apps
        wingen share encode --from sel.json -t   # Token for a saved selection
    """
    if bool(ids) == (from_path is not None):
        print_error("Pass either app ids or --from FILE.")
        raise typer.Exit(code=1)

    config = get_config(ctx)
    stored = read_payload(from_path, None)

    if stored is not None:
        selected_ids = list(stored.selected_ids)
        base_options = stored.options
    else:
        selected_ids = list(ids or [])
        base_options = config.options.to_options()

    payload = {
        "selectedIds": selected_ids,
        "options": merge_options(
            base_options, silent, continue_on_error, include_msstore
        ).to_dict(),
    }

    try:
        token = encode_share_payload(payload)
        url = share_url_for_token(base_url or config.share_base_url, token)
    except SelectionCodecError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if token_only:
        typer.echo(token)
        return

    console.print(f"[bold_header]Token:[/] {token}", soft_wrap=True)
    console.print(f"[bold_header]URL:[/]   {escape(url)}", soft_wrap=True)


def _print_payload(payload: SelectionPayload) -> None:
    options = payload.options
    console.print(f"[bold_header]Version:[/] {payload.version}")
    console.print(f"[bold_header]Apps ({len(payload.selected_ids)}):[/]")
    for package_id in payload.selected_ids:
        console.print(f"  {escape(package_id)}")
    console.print("[bold_header]Options:[/]")
    console.print(f"  silent install:        {options.silent_install}")
    console.print(f"  continue on error:     {options.continue_on_error}")
    console.print(f"  include msstore apps:  {options.include_ms_store_apps}")


@app.command()
def decode(
    value: Annotated[
        str,
        typer.Argument(help="Share token, share URL or selection JSON."),
    ],
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Write the decoded selection to a JSON file.",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the decoded selection as JSON.",
        ),
    ] = False,
) -> None:
    """Decode a share token or URL and show the selection.

    Examples:
        wingen share decode "https://example.org/#/share/eJy..."
        wingen share decode eJy... --export selection.json
    """
    try:
        payload = parse_from_text(value)
    except SelectionCodecError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if export_path is not None:
        export_path = export_path.resolve()
        if export_path.is_dir():
            print_error(f"Export path is a directory: {export_path}")
            raise typer.Exit(code=1)
        try:
            export_path.parent.mkdir(parents=True, exist_ok=True)
            export_path.write_text(json.dumps(payload.to_dict(), indent=2) + "\n")
        except OSError as e:
            print_error(f"Failed to export: {e}")
            raise typer.Exit(code=1) from e
        print_info(f"Selection exported to {export_path}")

    if as_json:
        typer.echo(json.dumps(payload.to_dict(), indent=2))
        return

    _print_payload(payload)
