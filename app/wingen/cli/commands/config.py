"""Config command implementation.

Shows and initializes the wingen configuration file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from wingen.cli.types import get_config
from wingen.core.config import ConfigError, GeneratorConfig, config_to_dict, save_config
from wingen.core.paths import get_config_path
from wingen.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration.

    Defaults are shown when no configuration file exists.
    """
    path = (ctx.obj or {}).get("config_path") or get_config_path()
    config = get_config(ctx)

    if path.exists():
        console.print(f"[dim]# {escape(str(path))}[/dim]", soft_wrap=True)
    else:
        console.print(
            f"[dim]# {escape(str(path))} (not found, showing defaults)[/dim]", soft_wrap=True
        )

    console.print(escape(tomli_w.dumps(config_to_dict(config))), end="", soft_wrap=True)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Write a configuration file with default values."""
    path = (ctx.obj or {}).get("config_path") or get_config_path()

    if path.exists() and not force:
        print_error(f"Configuration already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(GeneratorConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")
