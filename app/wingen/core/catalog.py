"""Catalog loading and filtering.

The catalog is a JSON array of package records. This module loads and
validates it, maps selected ids to records and filters records for the
catalog listing.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import date
from difflib import SequenceMatcher
from enum import Enum
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from wingen.core.paths import get_bundled_data_path, get_user_catalog_path
from wingen.core.resolver import display_name_key
from wingen.models.package import PackageRecord, ProviderKind

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(list[PackageRecord])


class CatalogError(Exception):
    """Base exception for catalog-related errors."""


class CatalogNotFoundError(CatalogError):
    """Raised when the catalog file is not found."""


class CatalogParseError(CatalogError):
    """Raised when the catalog file is not valid JSON."""


class CatalogValidationError(CatalogError):
    """Raised when catalog content is invalid."""


class SortMode(str, Enum):
    """Catalog listing order."""

    POPULARITY = "popularity"
    NAME = "name"
    RECENT = "recent"


def get_default_catalog_path() -> Path:
    """Get the catalog used when none is configured.

    Returns:
        The user catalog if it exists, otherwise the bundled sample catalog.
    """
    user_path = get_user_catalog_path()
    if user_path.exists():
        return user_path
    return get_bundled_data_path("catalog.json")


def find_duplicate_ids(records: Iterable[PackageRecord]) -> list[str]:
    """Return ids that occur more than once, in first-duplicate order."""
    seen: set[str] = set()
    duplicates: dict[str, None] = {}
    for record in records:
        if record.id in seen:
            duplicates[record.id] = None
            continue
        seen.add(record.id)
    return list(duplicates)


def load_catalog(path: Path | None = None) -> list[PackageRecord]:
    """Load and validate a catalog file.

    Args:
        path: Path to the catalog JSON. If None, uses the default catalog.

    Returns:
        Validated package records in file order.

    Raises:
        CatalogNotFoundError: If the file doesn't exist.
        CatalogParseError: If the file is not valid JSON.
        CatalogValidationError: If a record is invalid or ids are duplicated.
    """
    catalog_path = path or get_default_catalog_path()

    if not catalog_path.exists():
        raise CatalogNotFoundError(f"Catalog not found: {catalog_path}")

    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read catalog: {e}") from e

    try:
        records = _CATALOG_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CatalogValidationError(f"Catalog validation failed: {e}") from e

    duplicates = find_duplicate_ids(records)
    if duplicates:
        raise CatalogValidationError(
            f"Catalog contains duplicate app ids: {', '.join(duplicates)}"
        )

    logger.debug("Loaded %d catalog record(s) from %s", len(records), catalog_path)
    return records


def select_records(
    catalog: Sequence[PackageRecord], ids: Iterable[str]
) -> tuple[list[PackageRecord], list[str]]:
    """Map selected ids to catalog records.

    Args:
        catalog: Loaded catalog.
        ids: Selected package ids (duplicates are ignored).

    Returns:
        Tuple of (records in selection order, ids not found in the catalog).
    """
    by_id = {record.id: record for record in catalog}
    records: list[PackageRecord] = []
    missing: list[str] = []

    for package_id in dict.fromkeys(ids):
        record = by_id.get(package_id)
        if record is None:
            missing.append(package_id)
        else:
            records.append(record)

    return records, missing


# Searched fields and their relevance weights
SEARCH_WEIGHTS: dict[str, float] = {
    "name": 0.5,
    "tags": 0.25,
    "description": 0.2,
    "category": 0.05,
}
# Maximum distance (1 - similarity) for a field to count as a match
SEARCH_THRESHOLD = 0.35
MIN_MATCH_LENGTH = 2


def _field_values(record: PackageRecord, key: str) -> list[str]:
    if key == "tags":
        return [tag for tag in record.tags if tag]
    value = getattr(record, key)
    return [value] if value else []


def _similarity(query: str, text: str) -> float:
    """Best similarity between the query and the text or any run of its words.

    Both arguments must already be casefolded. A substring counts as an
    exact match.
    """
    if query in text:
        return 1.0
    words = text.split()
    span = len(query.split())
    candidates = [text]
    candidates.extend(" ".join(words[i : i + span]) for i in range(len(words) - span + 1))
    return max(SequenceMatcher(None, query, candidate).ratio() for candidate in candidates)


def score_record(record: PackageRecord, query: str) -> float:
    """Weighted relevance of a record for a search query.

    Args:
        record: Catalog record.
        query: Search query (case-insensitive).

    Returns:
        Sum of the weights of matching fields, each scaled by its
        similarity. 0.0 means the record does not match.
    """
    needle = query.strip().casefold()
    if len(needle) < MIN_MATCH_LENGTH:
        return 0.0

    score = 0.0
    for key, weight in SEARCH_WEIGHTS.items():
        best = max(
            (_similarity(needle, value.casefold()) for value in _field_values(record, key)),
            default=0.0,
        )
        if best >= 1 - SEARCH_THRESHOLD:
            score += weight * best
    return score


def search_catalog(records: Iterable[PackageRecord], query: str) -> list[PackageRecord]:
    """Fuzzy-search catalog records.

    Matches name, tags, description and category with typo tolerance.
    Query terms shorter than two characters match nothing.

    Args:
        records: Catalog records.
        query: Search query. Blank returns every record unchanged.

    Returns:
        Matching records, most relevant first.
    """
    records = list(records)
    if not query.strip():
        return records

    scored = [(score_record(record, query), record) for record in records]
    matches = [(score, record) for score, record in scored if score > 0]
    logger.debug("Search %r matched %d of %d record(s)", query, len(matches), len(records))
    matches.sort(key=lambda pair: -pair[0])
    return [record for _, record in matches]


def filter_catalog(
    records: Iterable[PackageRecord],
    *,
    query: str = "",
    category: str | None = None,
    providers: Iterable[ProviderKind] = (),
    popular_only: bool = False,
    sort: SortMode = SortMode.POPULARITY,
) -> list[PackageRecord]:
    """Filter and sort catalog records for display.

    Args:
        records: Catalog records.
        query: Fuzzy search query (see :func:`search_catalog`). Blank
            matches everything.
        category: Keep only this category (case-insensitive).
        providers: Keep records mapped to any of these providers.
        popular_only: Keep only popular records.
        sort: Result order, applied after searching.

    Returns:
        Matching records.
    """
    wanted = set(providers)
    result = [
        record
        for record in search_catalog(records, query)
        if (category is None or record.category.lower() == category.lower())
        and (not wanted or wanted.intersection(record.providers.available()))
        and (not popular_only or record.is_popular)
    ]

    if sort == SortMode.NAME:
        result.sort(key=lambda record: display_name_key(record.name))
    elif sort == SortMode.RECENT:
        # Newest first, undated records last
        result.sort(key=lambda record: record.added_at or date.min, reverse=True)
    else:
        result.sort(key=lambda record: -record.popularity)

    return result


def extract_categories(records: Iterable[PackageRecord]) -> list[str]:
    """Return the distinct non-empty categories, sorted by name."""
    categories = {record.category for record in records if record.category}
    return sorted(categories, key=display_name_key)
