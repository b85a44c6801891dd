"""Package records and provider mappings.

This module defines the catalog entries the generator works on. Each record
maps one application to the identifiers understood by the supported
package managers (winget, Chocolatey, Scoop).
"""

from datetime import date
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Winget source value marking a Microsoft Store distribution
MS_STORE_SOURCE = "msstore"

DEFAULT_WINGET_SOURCE = "winget"
DEFAULT_SCOOP_BUCKET = "main"


class ProviderKind(str, Enum):
    """Enumeration of supported package providers.

    The declaration order is the fallback priority.
    """

    WINGET = "winget"
    CHOCO = "choco"
    SCOOP = "scoop"


class _MappingBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    package_id: Annotated[
        str,
        Field(alias="packageId", min_length=1, description="Provider package identifier"),
    ]
    notes: Annotated[str, Field(description="Free-form mapping notes")] = ""


class WingetMapping(_MappingBase):
    """Winget package mapping.

    Attributes:
        package_id: Winget package identifier (e.g., 'Microsoft.VisualStudioCode').
        source: Winget source name. 'msstore' marks a store-gated package.
        supports_silent: Whether the installer honours --silent.
        notes: Free-form notes.
    """

    source: Annotated[str, Field(min_length=1, description="Winget source")] = (
        DEFAULT_WINGET_SOURCE
    )
    supports_silent: Annotated[
        bool,
        Field(alias="supportsSilent", description="Installer supports silent mode"),
    ] = True

    @property
    def is_ms_store(self) -> bool:
        """Check if this mapping points at the Microsoft Store source."""
        return self.source.strip().lower() == MS_STORE_SOURCE


class ChocoMapping(_MappingBase):
    """Chocolatey package mapping."""


class ScoopMapping(_MappingBase):
    """Scoop package mapping.

    Attributes:
        package_id: Scoop app name.
        bucket: Bucket that provides the app ('main' needs no bucket add).
        notes: Free-form notes.
    """

    bucket: Annotated[str, Field(min_length=1, description="Scoop bucket")] = DEFAULT_SCOOP_BUCKET

    @property
    def needs_bucket(self) -> bool:
        """Check if the bucket must be added before installing."""
        return self.bucket != DEFAULT_SCOOP_BUCKET


class ProviderMappings(BaseModel):
    """Provider mappings of a single package.

    At least one provider mapping is required.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    winget: WingetMapping | None = None
    choco: ChocoMapping | None = None
    scoop: ScoopMapping | None = None

    @model_validator(mode="after")
    def validate_has_provider(self) -> "ProviderMappings":
        """Validate that at least one provider mapping is present."""
        if self.winget is None and self.choco is None and self.scoop is None:
            msg = "At least one provider mapping is required."
            raise ValueError(msg)
        return self

    def available(self) -> list[ProviderKind]:
        """Return the providers with a mapping, in fallback priority order."""
        return [kind for kind in ProviderKind if getattr(self, kind.value) is not None]


class PackageRecord(BaseModel):
    """A catalog entry describing one installable application.

    Records are read-only; they are loaded once from the catalog and passed
    unchanged through resolution and emission.

    Attributes:
        id: Stable unique identifier (e.g., 'visual-studio-code').
        name: Display name used for ordering and output.
        providers: Provider mappings for winget, Chocolatey and Scoop.
        needs_verification: Mapping should be confirmed manually; surfaced as
            a warning in generated output, never changes resolution.
        description: Short description (catalog listing only).
        category: Catalog category (catalog listing only).
        tags: Search tags (catalog listing only).
        popularity: Popularity score 0-100 (catalog listing only).
        added_at: Date the record was added (catalog listing only).
        homepage: Project homepage.
        license: License name.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: Annotated[str, Field(min_length=1, description="Stable package identifier")]
    name: Annotated[str, Field(min_length=1, description="Display name")]
    providers: Annotated[ProviderMappings, Field(description="Provider mappings")]
    needs_verification: Annotated[
        bool,
        Field(alias="needsVerification", description="Mapping needs manual confirmation"),
    ] = False
    description: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()
    popularity: Annotated[int, Field(ge=0, le=100)] = 0
    added_at: Annotated[date | None, Field(alias="addedAt")] = None
    homepage: str | None = None
    license: str | None = None

    @property
    def is_popular(self) -> bool:
        """Check if the package counts as popular in catalog listings."""
        return self.popularity >= 80 or "popular" in self.tags
