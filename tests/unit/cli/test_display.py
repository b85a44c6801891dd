"""Unit tests for plan display helpers."""

from rich.console import Console
from wingen.cli.display import create_plan_table, create_skipped_table
from wingen.core.resolver import resolve
from wingen.core.theme import get_theme
from wingen.models.options import GeneratorOptions
from wingen.models.package import PackageRecord


def _render(table: object) -> str:
    console = Console(theme=get_theme(), width=200, record=True)
    console.print(table)
    return console.export_text()


class TestCreatePlanTable:
    """Tests for create_plan_table."""

    def test_one_row_per_item(
        self, mixed_records: list[PackageRecord], default_options: GeneratorOptions
    ) -> None:
        """Rows match the plan."""
        resolved = resolve(mixed_records, default_options)
        table = create_plan_table(resolved, default_options)
        assert table.row_count == len(resolved.plan)
        assert [column.header for column in table.columns] == ["#", "App", "Provider", "Command"]

    def test_bucket_noted_on_first_use(
        self, scoop_only_record: PackageRecord, default_options: GeneratorOptions
    ) -> None:
        """The bucket add is shown before the install command."""
        resolved = resolve([scoop_only_record], default_options)
        text = _render(create_plan_table(resolved, default_options))
        assert "bucket add extras; scoop install vendor-scoop-only" in text


class TestCreateSkippedTable:
    """Tests for create_skipped_table."""

    def test_lists_store_ids(
        self, whatsapp_record: PackageRecord, default_options: GeneratorOptions
    ) -> None:
        """Skipped apps show their store id."""
        resolved = resolve([whatsapp_record], default_options)
        text = _render(create_skipped_table(resolved.skipped))
        assert "WhatsApp" in text
        assert "9NKSQGP7F2NH" in text
