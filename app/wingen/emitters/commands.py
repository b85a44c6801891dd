"""Plain command-list emitters.

Produces copy-paste friendly command lists: the full winget list, plus one
list per alternative provider that is omitted when that provider has
nothing to install.
"""

from wingen.core.commands import bucket_add_command, distinct_buckets, install_command
from wingen.models.options import GeneratorOptions
from wingen.models.plan import InstallPlanItem, ResolvedPlan

REVIEW_NOTICE = "# Review scripts before running."


def verify_comment(item: InstallPlanItem) -> str:
    """Comment line flagging a mapping that needs manual confirmation."""
    return f"# VERIFY: {item.record.name} mapping may need manual confirmation."


def emit_winget_commands(resolved: ResolvedPlan, options: GeneratorOptions) -> str:
    """Render the winget command list.

    Args:
        resolved: Resolver output.
        options: Generator options.

    Returns:
        One winget command per winget plan item, preceded by comments.
    """
    lines = ["# wingen winget commands", REVIEW_NOTICE]

    excluded = resolved.excluded_ms_store()
    if not options.include_ms_store_apps and excluded:
        names = ", ".join(record.name for record in excluded)
        lines.append(f"# Skipped msstore apps ({len(excluded)}): {names}")

    items = resolved.winget_items()
    if not items:
        lines.append("# No winget-compatible apps in this selection.")
        return "\n".join(lines)

    for item in items:
        if item.record.needs_verification:
            lines.append(verify_comment(item))
        lines.append(install_command(item, options))

    return "\n".join(lines)


def emit_choco_commands(resolved: ResolvedPlan, options: GeneratorOptions) -> str | None:
    """Render the Chocolatey command list.

    Returns:
        The command list, or None when no plan item uses Chocolatey.
    """
    items = resolved.choco_items()
    if not items:
        return None

    lines = [
        "# wingen Chocolatey commands",
        "# Only apps planned for Chocolatey are included.",
    ]
    for item in items:
        if item.record.needs_verification:
            lines.append(verify_comment(item))
        lines.append(install_command(item, options))

    return "\n".join(lines)


def emit_scoop_commands(resolved: ResolvedPlan, options: GeneratorOptions) -> str | None:
    """Render the Scoop command list.

    Buckets other than 'main' are added once each, in first-seen order,
    before any install.

    Returns:
        The command list, or None when no plan item uses Scoop.
    """
    items = resolved.scoop_items()
    if not items:
        return None

    lines = [
        "# wingen Scoop commands",
        "# Only apps planned for Scoop are included.",
    ]
    lines.extend(bucket_add_command(bucket) for bucket in distinct_buckets(items))

    for item in items:
        if item.record.needs_verification:
            lines.append(verify_comment(item))
        lines.append(install_command(item, options))

    return "\n".join(lines)
