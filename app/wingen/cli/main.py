"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from wingen import __version__
from wingen.cli.commands import catalog, config, generate, plan, share
from wingen.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="wingen",
    help="Generate Windows install scripts from an app catalog.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wingen version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route wingen log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG when True, WARNING otherwise.
    """
    package_logger = logging.getLogger("wingen")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False, show_time=False)
        )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    catalog_path: Annotated[
        Path | None,
        typer.Option(
            "--catalog",
            help="Catalog JSON file (overrides the configured catalog).",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Configuration file (default: ~/.config/wingen/config.toml).",
        ),
    ] = None,
) -> None:
    """wingen - Windows install script generator.

    Pick apps from a catalog and turn the selection into PowerShell and
    batch installers, provider command lists and shareable links.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["catalog_path"] = catalog_path
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(catalog.app, name="catalog")
# Plain commands: options may follow the variadic app ids
app.command("plan")(plan.show_plan)
app.command("generate")(generate.generate_outputs)
app.add_typer(share.app, name="share")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
