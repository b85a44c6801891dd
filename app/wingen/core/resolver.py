"""Install plan resolution.

Turns a selection of package records into an ordered install plan, choosing
one provider per package. winget is preferred; Chocolatey and Scoop are used
when a package has no winget mapping, or when its winget mapping comes from
the Microsoft Store and store apps are excluded.
"""

import logging
from collections.abc import Iterable

from wingen.models.options import GeneratorOptions
from wingen.models.package import PackageRecord
from wingen.models.plan import (
    ChocoPlanItem,
    InstallPlanItem,
    ResolvedPlan,
    ScoopPlanItem,
    SkippedItem,
    WingetPlanItem,
)

logger = logging.getLogger(__name__)


def display_name_key(name: str) -> tuple[str, str]:
    """Sort key for display names.

    Names compare case-insensitively; on ties lowercase sorts before
    uppercase ('app' < 'App' < 'apple').
    """
    return (name.casefold(), name.swapcase())


def dedupe_and_sort(records: Iterable[PackageRecord]) -> list[PackageRecord]:
    """Deduplicate records by id and order them by display name.

    When an id occurs more than once the last record wins.

    Args:
        records: Selected package records in any order.

    Returns:
        One record per id, sorted by display name.
    """
    by_id: dict[str, PackageRecord] = {}
    for record in records:
        by_id[record.id] = record
    return sorted(by_id.values(), key=lambda record: display_name_key(record.name))


def _fallback_item(record: PackageRecord) -> InstallPlanItem | None:
    """Pick the Chocolatey mapping, else the Scoop mapping, else nothing."""
    providers = record.providers
    if providers.choco is not None:
        return ChocoPlanItem(record=record, mapping=providers.choco)
    if providers.scoop is not None:
        return ScoopPlanItem(record=record, mapping=providers.scoop)
    return None


def resolve(records: Iterable[PackageRecord], options: GeneratorOptions) -> ResolvedPlan:
    """Resolve package records into an install plan.

    Rules, applied per record in display-name order:

    1. A winget mapping is used unless it is msstore-sourced and store apps
       are excluded.
    2. An excluded msstore package falls back to Chocolatey, then Scoop. With
       neither it is reported in ``skipped``.
    3. Without a winget mapping, Chocolatey then Scoop is used. A record with
       no usable mapping at all is dropped without being reported.

    This function never raises and has no side effects.

    Args:
        records: Selected package records (duplicates allowed).
        options: Generator options.

    Returns:
        ResolvedPlan with the ordered plan and skipped msstore packages.
    """
    ordered = dedupe_and_sort(records)
    plan: list[InstallPlanItem] = []
    skipped: list[SkippedItem] = []

    for record in ordered:
        winget = record.providers.winget

        if winget is not None and (options.include_ms_store_apps or not winget.is_ms_store):
            plan.append(WingetPlanItem(record=record, mapping=winget))
            continue

        fallback = _fallback_item(record)

        if winget is not None:
            # msstore excluded by options
            if fallback is None:
                logger.debug("Skipping msstore package without fallback: %s", record.id)
                skipped.append(SkippedItem(record=record, mapping=winget))
                continue
            logger.debug(
                "Using %s fallback for msstore package: %s", fallback.method.value, record.id
            )
            plan.append(fallback)
            continue

        if fallback is None:
            logger.debug("Dropping package without usable provider: %s", record.id)
            continue

        plan.append(fallback)

    return ResolvedPlan(records=tuple(ordered), plan=tuple(plan), skipped=tuple(skipped))
