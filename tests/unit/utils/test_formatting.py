"""Unit tests for console formatting helpers."""

import pytest
from wingen.models.package import ProviderKind
from wingen.utils.formatting import create_table, format_provider, print_error, print_success


class TestFormatting:
    """Tests for formatting helpers."""

    def test_create_table_styles(self) -> None:
        """Tables share header and border styles."""
        table = create_table("Title")
        assert table.title == "Title"
        assert table.header_style == "bold_header"
        assert table.border_style == "border"

    @pytest.mark.parametrize("kind", list(ProviderKind))
    def test_format_provider(self, kind: ProviderKind) -> None:
        """Provider names are wrapped in their own style."""
        assert format_provider(kind) == f"[{kind.value}]{kind.value}[/]"

    def test_print_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors are printed to stderr with a prefix."""
        print_error("boom")
        captured = capsys.readouterr()
        assert "Error: boom" in captured.err
        assert captured.out == ""

    def test_print_success_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Success messages are printed to stdout."""
        print_success("done")
        assert "done" in capsys.readouterr().out
