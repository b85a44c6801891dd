"""Shared Rich display functions for install plans.

Provides the table builders and summary printer used by the plan and
generate commands.
"""

from rich.markup import escape
from rich.table import Table

from wingen.core.commands import install_command, iter_bucket_additions
from wingen.models.options import GeneratorOptions
from wingen.models.package import ProviderKind
from wingen.models.plan import ResolvedPlan, SkippedItem
from wingen.utils.formatting import console, create_table, format_provider


def create_plan_table(resolved: ResolvedPlan, options: GeneratorOptions) -> Table:
    """Create a Rich table displaying the install plan.

    Rows appear in install order. Scoop items that add a bucket first note
    the bucket, and items needing manual verification are flagged.

    Args:
        resolved: Resolver output.
        options: Generator options used to render commands.

    Returns:
        Rich Table configured for plan display.
    """
    table = create_table("Install Plan")
    table.add_column("#", justify="right", style="muted")
    table.add_column("App", no_wrap=True)
    table.add_column("Provider", width=8)
    table.add_column("Command", style="text", overflow="fold")

    for index, (item, bucket) in enumerate(iter_bucket_additions(resolved.plan), start=1):
        name = escape(item.record.name)
        if item.record.needs_verification:
            name = f"{name} [warning](verify)[/warning]"

        command = escape(install_command(item, options))
        if bucket is not None:
            command = f"[muted]bucket add {escape(bucket)};[/muted] {command}"

        table.add_row(str(index), name, format_provider(item.method), command)

    return table


def create_skipped_table(skipped: tuple[SkippedItem, ...]) -> Table:
    """Create a Rich table listing Microsoft Store apps that were skipped.

    Args:
        skipped: Skipped items from the resolver.

    Returns:
        Rich Table with one row per skipped app.
    """
    table = create_table("Skipped Microsoft Store Apps")
    table.add_column("App", no_wrap=True)
    table.add_column("Store ID", style="muted")

    for item in skipped:
        table.add_row(escape(item.record.name), escape(item.mapping.package_id))

    return table


def print_plan_summary(resolved: ResolvedPlan) -> None:
    """Print per-provider counts of the install plan.

    Args:
        resolved: Resolver output.
    """
    parts: list[str] = []
    for kind in ProviderKind:
        count = len(resolved.items_for(kind))
        if count:
            parts.append(f"[{kind.value}]{count} via {kind.value}[/{kind.value}]")
    if resolved.skipped:
        parts.append(f"[warning]{len(resolved.skipped)} skipped[/warning]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")
