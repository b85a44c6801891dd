"""Plan command implementation.

Shows how a selection would be installed without generating anything.
"""

import typer

from wingen.cli.display import create_plan_table, create_skipped_table, print_plan_summary
from wingen.cli.types import (
    ContinueOnErrorOption,
    FromFileOption,
    IncludeMsStoreOption,
    PackageIdsArgument,
    ShareInputOption,
    SilentOption,
    gather_selection,
)
from wingen.core.resolver import resolve
from wingen.utils.formatting import console, print_info, print_warning


def show_plan(
    ctx: typer.Context,
    ids: PackageIdsArgument = None,
    from_path: FromFileOption = None,
    share_input: ShareInputOption = None,
    silent: SilentOption = None,
    continue_on_error: ContinueOnErrorOption = None,
    include_msstore: IncludeMsStoreOption = None,
) -> None:
    """Show the install plan for a selection.

    Resolves the selection and displays the provider chosen for each app.

    Examples:
        wingen plan vlc firefox 7zip          # Plan for catalog ids
        wingen plan --from selection.json     # Plan for a saved selection
        wingen plan --share "<url or token>"  # Plan for a shared selection
        wingen plan spotify --include-msstore # Allow Microsoft Store installs
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
    resolved = resolve(selection.records, selection.options)

    if resolved.plan:
        console.print(create_plan_table(resolved, selection.options))
    else:
        print_info("Nothing to install for this selection.")

    if resolved.skipped:
        console.print(create_skipped_table(resolved.skipped))
        print_warning(
            "Microsoft Store apps without a Chocolatey or Scoop fallback are skipped. "
            "Use --include-msstore to install them with winget."
        )

    print_plan_summary(resolved)
