"""Provider command construction.

Every emitter renders install commands through this module so that flag,
source and bucket decisions are made in exactly one place.
"""

from collections.abc import Iterable, Iterator

from wingen.models.options import GeneratorOptions
from wingen.models.package import DEFAULT_WINGET_SOURCE, WingetMapping
from wingen.models.plan import ChocoPlanItem, InstallPlanItem, ScoopPlanItem, WingetPlanItem


def use_silent(mapping: WingetMapping, options: GeneratorOptions) -> bool:
    """Check if the silent flag applies to a winget mapping."""
    return options.silent_install and mapping.supports_silent


def build_winget_args(mapping: WingetMapping, options: GeneratorOptions) -> list[str]:
    """Build winget install arguments for a mapping.

    ``--source`` is added only for non-default sources and ``--silent`` only
    when silent installs are requested and the package supports them.

    Args:
        mapping: Winget mapping of the package.
        options: Generator options.

    Returns:
        Argument list, without the ``winget`` executable.
    """
    source = mapping.source.strip()
    args = [
        "install",
        "--id",
        mapping.package_id,
        "--exact",
        "--accept-source-agreements",
        "--accept-package-agreements",
    ]

    if source and source != DEFAULT_WINGET_SOURCE:
        args.extend(["--source", source])

    if use_silent(mapping, options):
        args.append("--silent")

    return args


def build_install_args(item: InstallPlanItem, options: GeneratorOptions) -> list[str]:
    """Build the install arguments for any plan item."""
    match item:
        case WingetPlanItem(mapping=mapping):
            return build_winget_args(mapping, options)
        case ChocoPlanItem(mapping=mapping):
            return ["install", mapping.package_id, "-y"]
        case ScoopPlanItem(mapping=mapping):
            return ["install", mapping.package_id]


def runner_for(item: InstallPlanItem) -> str:
    """Return the executable that installs a plan item."""
    return item.method.value


def quote_arg(arg: str) -> str:
    """Wrap an argument in double quotes if it contains a space."""
    return f'"{arg}"' if " " in arg else arg


def format_command(runner: str, args: Iterable[str]) -> str:
    """Render a runner and its arguments as a single command line."""
    return " ".join([runner, *(quote_arg(arg) for arg in args)])


def install_command(item: InstallPlanItem, options: GeneratorOptions) -> str:
    """Render the full install command line for a plan item."""
    return format_command(runner_for(item), build_install_args(item, options))


def bucket_add_command(bucket: str) -> str:
    """Render the Scoop command that adds a bucket."""
    return format_command("scoop", ["bucket", "add", bucket])


def iter_bucket_additions(
    items: Iterable[InstallPlanItem],
) -> Iterator[tuple[InstallPlanItem, str | None]]:
    """Pair each plan item with the Scoop bucket to add before it.

    A bucket is returned only for the first item that needs it; 'main' is
    never added. Seen buckets are tracked per call.

    Args:
        items: Plan items in install order.

    Yields:
        Tuples of (item, bucket or None).
    """
    seen: dict[str, None] = {}
    for item in items:
        bucket: str | None = None
        if isinstance(item, ScoopPlanItem):
            candidate = item.mapping.bucket
            if item.mapping.needs_bucket and candidate not in seen:
                seen[candidate] = None
                bucket = candidate
        yield item, bucket


def distinct_buckets(items: Iterable[InstallPlanItem]) -> list[str]:
    """Return the non-default Scoop buckets used by items, in first-seen order."""
    return [bucket for _, bucket in iter_bucket_additions(items) if bucket is not None]
