"""Unit tests for generate_install_outputs and GeneratorOutput."""

from wingen.emitters import OutputFormat, generate_install_outputs
from wingen.models.options import GeneratorOptions
from wingen.models.package import PackageRecord


class TestOutputFormat:
    """Tests for OutputFormat."""

    def test_filenames(self) -> None:
        """Each format has a distinct file name."""
        names = {fmt.filename for fmt in OutputFormat}
        assert len(names) == len(OutputFormat)
        assert OutputFormat.PS1.filename == "wingen-install.ps1"
        assert OutputFormat.CMD.filename == "wingen-install.cmd"


class TestGenerateInstallOutputs:
    """Tests for generate_install_outputs."""

    def test_all_artifacts(
        self, mixed_records: list[PackageRecord], default_options: GeneratorOptions
    ) -> None:
        """A selection using every provider yields all six artifacts."""
        output = generate_install_outputs(mixed_records, default_options)
        assert [fmt for fmt, _ in output.artifacts()] == list(OutputFormat)
        assert output.get(OutputFormat.JSON) == output.selection_json

    def test_absent_provider_lists_skipped(
        self, vscode_record: PackageRecord, default_options: GeneratorOptions
    ) -> None:
        """Unused provider lists are not among the artifacts."""
        output = generate_install_outputs([vscode_record], default_options)
        formats = [fmt for fmt, _ in output.artifacts()]
        assert OutputFormat.CHOCO not in formats
        assert OutputFormat.SCOOP not in formats
        assert output.get(OutputFormat.CHOCO) is None

    def test_empty_selection(self, default_options: GeneratorOptions) -> None:
        """An empty selection still renders installers and the winget list."""
        output = generate_install_outputs([], default_options)
        assert output.resolved.is_empty
        assert "No winget-compatible apps" in output.winget
        assert "$installPlan = @()" in output.ps1
        assert output.selection_json is None
        assert OutputFormat.JSON not in [fmt for fmt, _ in output.artifacts()]
