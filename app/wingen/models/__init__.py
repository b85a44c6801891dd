"""Data models for wingen.

This module exports the core data structures used throughout the application.
"""

from wingen.models.options import DEFAULT_GENERATOR_OPTIONS, GeneratorOptions
from wingen.models.package import (
    ChocoMapping,
    PackageRecord,
    ProviderKind,
    ProviderMappings,
    ScoopMapping,
    WingetMapping,
)
from wingen.models.plan import (
    ChocoPlanItem,
    InstallPlanItem,
    ResolvedPlan,
    ScoopPlanItem,
    SkippedItem,
    WingetPlanItem,
)
from wingen.models.selection import SELECTION_VERSION, SelectionPayload

__all__ = [
    "DEFAULT_GENERATOR_OPTIONS",
    "SELECTION_VERSION",
    "ChocoMapping",
    "ChocoPlanItem",
    "GeneratorOptions",
    "InstallPlanItem",
    "PackageRecord",
    "ProviderKind",
    "ProviderMappings",
    "ResolvedPlan",
    "ScoopMapping",
    "ScoopPlanItem",
    "SelectionPayload",
    "SkippedItem",
    "WingetMapping",
    "WingetPlanItem",
]
