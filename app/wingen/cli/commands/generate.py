"""Generate command implementation.

Renders install scripts and command lists for a selection, either to
stdout (one format) or into an output directory.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from wingen.cli.types import (
    ContinueOnErrorOption,
    FromFileOption,
    IncludeMsStoreOption,
    PackageIdsArgument,
    ShareInputOption,
    SilentOption,
    gather_selection,
    get_config,
)
from wingen.core.paths import ensure_dir
from wingen.emitters import GeneratorOutput, OutputFormat, generate_install_outputs
from wingen.utils.formatting import print_error, print_info, print_success, print_warning

logger = logging.getLogger(__name__)


def write_artifacts(
    output: GeneratorOutput,
    output_dir: Path,
    formats: list[OutputFormat] | None = None,
) -> list[Path]:
    """Write generated artifacts into a directory.

    Text is written verbatim (no newline translation) so the batch
    installer keeps its CRLF line endings.

    Args:
        output: Generated artifacts.
        output_dir: Target directory, created if missing.
        formats: Formats to write. None writes every generated artifact.

    Returns:
        Paths of the written files.

    Raises:
        RuntimeError: If the directory cannot be created.
        OSError: If a file cannot be written.
    """
    ensure_dir(output_dir, "output")
    written: list[Path] = []

    for output_format, text in output.artifacts():
        if formats is not None and output_format not in formats:
            continue
        path = output_dir / output_format.filename
        path.write_text(text, encoding="utf-8", newline="")
        logger.info("Wrote %s", path)
        written.append(path)

    return written


def generate_outputs(
    ctx: typer.Context,
    ids: PackageIdsArgument = None,
    from_path: FromFileOption = None,
    share_input: ShareInputOption = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format",
            "-f",
            help="Print a single artifact: ps1, cmd, winget, choco, scoop or json.",
            case_sensitive=False,
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write artifacts into this directory (default from config).",
        ),
    ] = None,
    silent: SilentOption = None,
    continue_on_error: ContinueOnErrorOption = None,
    include_msstore: IncludeMsStoreOption = None,
) -> None:
    """Generate installers and command lists for a selection.

    With --format and no --output the artifact is printed to stdout.
    Otherwise all artifacts (or only the --format one) are written to the
    output directory.

    Examples:
        wingen generate vlc firefox                  # Write all artifacts
        wingen generate vlc --format ps1 > setup.ps1 # Print the PowerShell installer
        wingen generate --from sel.json -o out/      # Write into out/
        wingen generate --share "<url>" --format cmd # Installer from a share link
    """
    selection = gather_selection(
        ctx,
        ids,
        from_path,
        share_input,
        silent,
        continue_on_error,
        include_msstore,
    )
    output = generate_install_outputs(selection.records, selection.options)

    if output.resolved.is_empty:
        print_warning("No installable apps in this selection.")

    if output_format is not None and output.get(output_format) is None:
        print_error(f"No {output_format.value} artifact for this selection.")
        raise typer.Exit(code=1)

    if output_format is not None and output_dir is None:
        text = output.get(output_format) or ""
        typer.echo(text, nl=not text.endswith("\n"))
        return

    target = output_dir or get_config(ctx).output_dir
    formats = [output_format] if output_format is not None else None

    try:
        written = write_artifacts(output, target, formats)
    except (RuntimeError, OSError) as e:
        print_error(f"Failed to write artifacts: {e}")
        raise typer.Exit(code=1) from e

    for path in written:
        print_info(f"  {path}")
    print_success(f"Wrote {len(written)} artifact(s) to {target}")
