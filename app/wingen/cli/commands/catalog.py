"""Catalog command implementation.

Lists the apps available for selection.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from wingen.cli.types import get_catalog, get_config
from wingen.core.catalog import SortMode, extract_categories, filter_catalog
from wingen.models.package import PackageRecord, ProviderKind
from wingen.utils.formatting import console, create_table, format_provider, print_info

app = typer.Typer(
    help="Browse the app catalog.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _print_table(records: list[PackageRecord]) -> None:
    table = create_table("App Catalog")
    table.add_column("ID", no_wrap=True, style="muted")
    table.add_column("Name", no_wrap=True)
    table.add_column("Category")
    table.add_column("Providers")
    table.add_column("Pop.", justify="right", style="info")

    for record in records:
        providers = " ".join(format_provider(kind) for kind in record.providers.available())
        name = escape(record.name)
        if record.needs_verification:
            name = f"{name} [warning]*[/warning]"
        table.add_row(
            escape(record.id), name, escape(record.category), providers, str(record.popularity)
        )

    console.print(table)


@app.callback(invoke_without_command=True)
def list_catalog(
    ctx: typer.Context,
    search: Annotated[
        str,
        typer.Option(
            "--search",
            "-s",
            help="Fuzzy search over names, tags, descriptions and categories.",
        ),
    ] = "",
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            "-c",
            help="Only show apps in this category.",
        ),
    ] = None,
    providers: Annotated[
        list[ProviderKind] | None,
        typer.Option(
            "--provider",
            "-p",
            help="Only show apps available from this provider (repeatable).",
            case_sensitive=False,
        ),
    ] = None,
    popular: Annotated[
        bool,
        typer.Option(
            "--popular",
            help="Only show popular apps.",
        ),
    ] = False,
    sort: Annotated[
        SortMode,
        typer.Option(
            "--sort",
            help="Sort order: popularity, name or recent.",
            case_sensitive=False,
        ),
    ] = SortMode.POPULARITY,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of apps to display.",
        ),
    ] = None,
    list_categories: Annotated[
        bool,
        typer.Option(
            "--categories",
            help="List the catalog categories and exit.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show catalog apps that can be selected.

    Examples:
        wingen catalog                        # All apps, most popular first
        wingen catalog --search browsr        # Fuzzy search, typos allowed
        wingen catalog --sort recent          # Newest additions first
        wingen catalog --provider scoop       # Apps installable with Scoop
        wingen catalog --popular --sort name  # Popular apps by name
        wingen catalog --categories           # List categories
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    catalog = get_catalog(ctx, get_config(ctx))

    if list_categories:
        for name in extract_categories(catalog):
            typer.echo(name)
        return

    records = filter_catalog(
        catalog,
        query=search,
        category=category,
        providers=providers or (),
        popular_only=popular,
        sort=sort,
    )

    if not records:
        print_info("No apps match the given filters.")
        return

    total = len(records)
    if limit:
        records = records[:limit]

    if output_format == OutputFormat.JSON:
        data = [record.model_dump(mode="json", by_alias=True) for record in records]
        typer.echo(json.dumps(data, indent=2))
        return

    _print_table(records)
    console.print(f"\n[dim]{total} app(s) in catalog view[/dim]")
    if len(records) < total:
        console.print(f"[dim](showing {len(records)} of {total}, limited to {limit})[/dim]")
