"""Output emitters for resolved install plans.

Every emitter is a pure function over the resolver output.
:func:`generate_install_outputs` resolves once and runs all of them, so the
artifacts of one generation always agree with each other.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from wingen.core.resolver import resolve
from wingen.emitters.batch import emit_batch
from wingen.emitters.commands import (
    emit_choco_commands,
    emit_scoop_commands,
    emit_winget_commands,
)
from wingen.emitters.powershell import emit_powershell
from wingen.emitters.selection import emit_selection_json
from wingen.models.options import GeneratorOptions
from wingen.models.package import PackageRecord
from wingen.models.plan import ResolvedPlan


class OutputFormat(str, Enum):
    """Generated artifact formats."""

    PS1 = "ps1"
    CMD = "cmd"
    WINGET = "winget"
    CHOCO = "choco"
    SCOOP = "scoop"
    JSON = "json"

    @property
    def filename(self) -> str:
        """Default file name for the artifact."""
        return _FILENAMES[self]


_FILENAMES: dict[OutputFormat, str] = {
    OutputFormat.PS1: "wingen-install.ps1",
    OutputFormat.CMD: "wingen-install.cmd",
    OutputFormat.WINGET: "winget-commands.txt",
    OutputFormat.CHOCO: "choco-commands.txt",
    OutputFormat.SCOOP: "scoop-commands.txt",
    OutputFormat.JSON: "wingen-selection.json",
}


@dataclass(frozen=True, slots=True)
class GeneratorOutput:
    """All artifacts generated for one selection.

    Attributes:
        resolved: The resolver output every artifact was rendered from.
        ps1: PowerShell installer.
        installer_cmd: Batch installer.
        winget: winget command list.
        choco: Chocolatey command list, None when nothing uses Chocolatey.
        scoop: Scoop command list, None when nothing uses Scoop.
        selection_json: Selection JSON, None for an empty selection.
    """

    resolved: ResolvedPlan
    ps1: str
    installer_cmd: str
    winget: str
    choco: str | None
    scoop: str | None
    selection_json: str | None

    def get(self, output_format: OutputFormat) -> str | None:
        """Get the artifact for a format, None if it was not generated."""
        match output_format:
            case OutputFormat.PS1:
                return self.ps1
            case OutputFormat.CMD:
                return self.installer_cmd
            case OutputFormat.WINGET:
                return self.winget
            case OutputFormat.CHOCO:
                return self.choco
            case OutputFormat.SCOOP:
                return self.scoop
            case OutputFormat.JSON:
                return self.selection_json

    def artifacts(self) -> Iterator[tuple[OutputFormat, str]]:
        """Iterate over generated artifacts, skipping absent ones."""
        for output_format in OutputFormat:
            text = self.get(output_format)
            if text is not None:
                yield output_format, text


def generate_install_outputs(
    records: Iterable[PackageRecord], options: GeneratorOptions
) -> GeneratorOutput:
    """Resolve a selection and render every artifact.

    Args:
        records: Selected package records (duplicates allowed).
        options: Generator options.

    Returns:
        GeneratorOutput with all artifacts.
    """
    resolved = resolve(records, options)
    return GeneratorOutput(
        resolved=resolved,
        ps1=emit_powershell(resolved, options),
        installer_cmd=emit_batch(resolved, options),
        winget=emit_winget_commands(resolved, options),
        choco=emit_choco_commands(resolved, options),
        scoop=emit_scoop_commands(resolved, options),
        selection_json=emit_selection_json(resolved, options),
    )


__all__ = [
    "GeneratorOutput",
    "OutputFormat",
    "emit_batch",
    "emit_choco_commands",
    "emit_powershell",
    "emit_scoop_commands",
    "emit_selection_json",
    "emit_winget_commands",
    "generate_install_outputs",
]
