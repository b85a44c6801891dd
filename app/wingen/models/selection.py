"""Selection payload model.

The selection payload is the canonical, shareable description of what the
user picked: a list of package ids plus generator options. It is both the
content of exported selection JSON files and the plaintext of share tokens.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StringConstraints, field_validator

from wingen.models.options import GeneratorOptions

SELECTION_VERSION = 1

PackageId = Annotated[str, StringConstraints(strict=True, min_length=1)]


class SelectionPayload(BaseModel):
    """A versioned selection of package ids and generator options.

    Duplicate ids are removed on validation, keeping the first occurrence,
    so every instance is already in normalized form.

    Attributes:
        version: Payload schema version (positive integer).
        selected_ids: Selected package ids (non-empty, deduplicated).
        options: Generator options to apply.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    version: Annotated[StrictInt, Field(gt=0, description="Payload schema version")] = (
        SELECTION_VERSION
    )
    selected_ids: Annotated[
        tuple[PackageId, ...],
        Field(alias="selectedIds", min_length=1, description="Selected package ids"),
    ]
    options: Annotated[GeneratorOptions, Field(description="Generator options")]

    @field_validator("selected_ids", mode="after")
    @classmethod
    def dedupe_ids(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Remove duplicate ids while preserving first-seen order."""
        return tuple(dict.fromkeys(value))

    def to_dict(self) -> dict[str, object]:
        """Convert to the camelCase dictionary used on the wire."""
        return {
            "version": self.version,
            "selectedIds": list(self.selected_ids),
            "options": self.options.to_dict(),
        }
