"""Unit tests for package models.

Tests for PackageRecord, provider mappings and ProviderKind.
"""

import pytest
from pydantic import ValidationError
from wingen.models.package import (
    ChocoMapping,
    PackageRecord,
    ProviderKind,
    ProviderMappings,
    ScoopMapping,
    WingetMapping,
)


class TestProviderKind:
    """Tests for ProviderKind enum."""

    def test_values(self) -> None:
        """ProviderKind has the expected values."""
        assert ProviderKind.WINGET.value == "winget"
        assert ProviderKind.CHOCO.value == "choco"
        assert ProviderKind.SCOOP.value == "scoop"

    def test_declaration_order_is_priority(self) -> None:
        """Iteration order is winget, choco, scoop."""
        assert list(ProviderKind) == [ProviderKind.WINGET, ProviderKind.CHOCO, ProviderKind.SCOOP]


class TestWingetMapping:
    """Tests for WingetMapping model."""

    def test_defaults(self) -> None:
        """Source defaults to winget and silent installs are supported."""
        mapping = WingetMapping.model_validate({"packageId": "Mozilla.Firefox"})
        assert mapping.package_id == "Mozilla.Firefox"
        assert mapping.source == "winget"
        assert mapping.supports_silent is True
        assert mapping.notes == ""

    @pytest.mark.parametrize("source", ["msstore", "MSStore", " msstore "])
    def test_is_ms_store_case_insensitive(self, source: str) -> None:
        """msstore detection ignores case and surrounding whitespace."""
        mapping = WingetMapping(package_id="9NCBCSZSJRSB", source=source)
        assert mapping.is_ms_store is True

    def test_regular_source_is_not_ms_store(self) -> None:
        """The winget source is not a store source."""
        assert WingetMapping(package_id="Git.Git").is_ms_store is False

    def test_empty_package_id_rejected(self) -> None:
        """packageId must not be empty."""
        with pytest.raises(ValidationError):
            WingetMapping.model_validate({"packageId": ""})

    def test_frozen(self) -> None:
        """Mappings are immutable."""
        mapping = WingetMapping(package_id="Git.Git")
        with pytest.raises(ValidationError):
            mapping.package_id = "Other"  # type: ignore[misc]


class TestScoopMapping:
    """Tests for ScoopMapping model."""

    def test_default_bucket_is_main(self) -> None:
        """Bucket defaults to main, which needs no bucket add."""
        mapping = ScoopMapping(package_id="7zip")
        assert mapping.bucket == "main"
        assert mapping.needs_bucket is False

    def test_custom_bucket_needs_add(self) -> None:
        """Non-main buckets must be added first."""
        mapping = ScoopMapping(package_id="vscode", bucket="extras")
        assert mapping.needs_bucket is True


class TestProviderMappings:
    """Tests for ProviderMappings model."""

    def test_requires_at_least_one_provider(self) -> None:
        """An empty mapping set is rejected."""
        with pytest.raises(ValidationError, match="At least one provider mapping"):
            ProviderMappings()

    def test_available_in_priority_order(self) -> None:
        """available() lists present providers in priority order."""
        mappings = ProviderMappings(
            scoop=ScoopMapping(package_id="a"),
            choco=ChocoMapping(package_id="a"),
        )
        assert mappings.available() == [ProviderKind.CHOCO, ProviderKind.SCOOP]


class TestPackageRecord:
    """Tests for PackageRecord model."""

    def test_parses_camel_case_catalog_entry(self) -> None:
        """Catalog entries use camelCase keys; unknown keys are ignored."""
        record = PackageRecord.model_validate(
            {
                "id": "vscode",
                "name": "Visual Studio Code",
                "needsVerification": True,
                "icon": "vscode.svg",
                "addedAt": "2024-01-01",
                "providers": {
                    "winget": {"packageId": "Microsoft.VisualStudioCode", "supportsSilent": False}
                },
            }
        )
        assert record.id == "vscode"
        assert record.needs_verification is True
        assert record.providers.winget is not None
        assert record.providers.winget.supports_silent is False
        assert record.providers.choco is None

    def test_metadata_defaults(self) -> None:
        """Listing metadata is optional."""
        record = PackageRecord.model_validate(
            {"id": "a", "name": "A", "providers": {"choco": {"packageId": "a"}}}
        )
        assert record.description == ""
        assert record.category == ""
        assert record.tags == ()
        assert record.popularity == 0
        assert record.needs_verification is False

    def test_empty_name_rejected(self) -> None:
        """Display name must not be empty."""
        with pytest.raises(ValidationError):
            PackageRecord.model_validate(
                {"id": "a", "name": "", "providers": {"choco": {"packageId": "a"}}}
            )

    def test_popularity_range(self) -> None:
        """Popularity is limited to 0-100."""
        with pytest.raises(ValidationError):
            PackageRecord.model_validate(
                {
                    "id": "a",
                    "name": "A",
                    "popularity": 101,
                    "providers": {"choco": {"packageId": "a"}},
                }
            )

    @pytest.mark.parametrize(
        ("popularity", "tags", "expected"),
        [
            (80, (), True),
            (79, (), False),
            (10, ("popular",), True),
            (0, ("editor",), False),
        ],
    )
    def test_is_popular(self, popularity: int, tags: tuple[str, ...], expected: bool) -> None:
        """Popular means a score of at least 80 or a 'popular' tag."""
        record = PackageRecord.model_validate(
            {
                "id": "a",
                "name": "A",
                "popularity": popularity,
                "tags": list(tags),
                "providers": {"choco": {"packageId": "a"}},
            }
        )
        assert record.is_popular is expected
