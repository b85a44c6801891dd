"""Generator options shared by the resolver, the emitters and the codec."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class GeneratorOptions(BaseModel):
    """Options controlling plan resolution and script generation.

    Serialized with camelCase keys, the same shape embedded in selection
    JSON and share tokens.

    Attributes:
        silent_install: Add the silent flag for winget packages that support it.
        continue_on_error: Keep installing after a failed package.
        include_ms_store_apps: Allow winget packages from the msstore source.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    silent_install: Annotated[
        StrictBool,
        Field(alias="silentInstall", description="Use silent installs where supported"),
    ]
    continue_on_error: Annotated[
        StrictBool,
        Field(alias="continueOnError", description="Continue after a failed install"),
    ]
    include_ms_store_apps: Annotated[
        StrictBool,
        Field(alias="includeMsStoreApps", description="Include msstore-sourced winget apps"),
    ]

    def to_dict(self) -> dict[str, bool]:
        """Convert to the camelCase dictionary used in selection JSON."""
        return self.model_dump(by_alias=True)


DEFAULT_GENERATOR_OPTIONS = GeneratorOptions(
    silent_install=True,
    continue_on_error=True,
    include_ms_store_apps=False,
)
