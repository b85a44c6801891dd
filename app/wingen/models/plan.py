"""Install plan models.

An install plan is an ordered list of items, each binding one package record
to the provider chosen to install it. The item types form a closed union so
emitters can dispatch on them with ``match``.
"""

from dataclasses import dataclass, field

from wingen.models.package import (
    ChocoMapping,
    PackageRecord,
    ProviderKind,
    ScoopMapping,
    WingetMapping,
)


@dataclass(frozen=True, slots=True)
class WingetPlanItem:
    """Install a package with winget."""

    record: PackageRecord
    mapping: WingetMapping

    @property
    def method(self) -> ProviderKind:
        return ProviderKind.WINGET


@dataclass(frozen=True, slots=True)
class ChocoPlanItem:
    """Install a package with Chocolatey."""

    record: PackageRecord
    mapping: ChocoMapping

    @property
    def method(self) -> ProviderKind:
        return ProviderKind.CHOCO


@dataclass(frozen=True, slots=True)
class ScoopPlanItem:
    """Install a package with Scoop."""

    record: PackageRecord
    mapping: ScoopMapping

    @property
    def method(self) -> ProviderKind:
        return ProviderKind.SCOOP


InstallPlanItem = WingetPlanItem | ChocoPlanItem | ScoopPlanItem


@dataclass(frozen=True, slots=True)
class SkippedItem:
    """A store-gated winget package that had no Chocolatey or Scoop fallback.

    Attributes:
        record: The package that could not be planned.
        mapping: Its msstore-sourced winget mapping.
    """

    record: PackageRecord
    mapping: WingetMapping


@dataclass(frozen=True, slots=True)
class ResolvedPlan:
    """Result of resolving a selection into an install plan.

    Attributes:
        records: Deduplicated selection in display-name order.
        plan: One item per installable record, in the same order.
        skipped: msstore packages excluded by options with no fallback.
    """

    records: tuple[PackageRecord, ...] = field(default=())
    plan: tuple[InstallPlanItem, ...] = field(default=())
    skipped: tuple[SkippedItem, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        """Check if nothing will be installed."""
        return not self.plan

    def items_for(self, kind: ProviderKind) -> list[InstallPlanItem]:
        """Get plan items installed by the given provider, in plan order."""
        return [item for item in self.plan if item.method == kind]

    def winget_items(self) -> list[WingetPlanItem]:
        """Get winget plan items."""
        return [item for item in self.plan if isinstance(item, WingetPlanItem)]

    def choco_items(self) -> list[ChocoPlanItem]:
        """Get Chocolatey plan items."""
        return [item for item in self.plan if isinstance(item, ChocoPlanItem)]

    def scoop_items(self) -> list[ScoopPlanItem]:
        """Get Scoop plan items."""
        return [item for item in self.plan if isinstance(item, ScoopPlanItem)]

    @property
    def required_providers(self) -> list[ProviderKind]:
        """Providers the plan needs, in fallback priority order."""
        used = {item.method for item in self.plan}
        return [kind for kind in ProviderKind if kind in used]

    def excluded_ms_store(self) -> list[PackageRecord]:
        """Records whose msstore winget mapping was excluded from the plan.

        Covers both packages that fell back to Chocolatey or Scoop and
        packages that were skipped entirely.
        """
        winget_ids = {item.record.id for item in self.winget_items()}
        return [
            record
            for record in self.records
            if record.providers.winget is not None
            and record.providers.winget.is_ms_store
            and record.id not in winget_ids
        ]
