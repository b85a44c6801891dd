"""Unit tests for generator options."""

import pytest
from pydantic import ValidationError
from wingen.models.options import DEFAULT_GENERATOR_OPTIONS, GeneratorOptions


class TestGeneratorOptions:
    """Tests for GeneratorOptions model."""

    def test_defaults(self) -> None:
        """Default options: silent, continue on error, no msstore apps."""
        assert DEFAULT_GENERATOR_OPTIONS.silent_install is True
        assert DEFAULT_GENERATOR_OPTIONS.continue_on_error is True
        assert DEFAULT_GENERATOR_OPTIONS.include_ms_store_apps is False

    def test_to_dict_uses_camel_case(self) -> None:
        """to_dict() produces the wire shape."""
        assert DEFAULT_GENERATOR_OPTIONS.to_dict() == {
            "silentInstall": True,
            "continueOnError": True,
            "includeMsStoreApps": False,
        }

    def test_accepts_aliases(self) -> None:
        """camelCase keys are accepted on input."""
        options = GeneratorOptions.model_validate(
            {"silentInstall": False, "continueOnError": False, "includeMsStoreApps": True}
        )
        assert options.silent_install is False
        assert options.include_ms_store_apps is True

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_strict_booleans(self, value: object) -> None:
        """Non-boolean values are rejected."""
        with pytest.raises(ValidationError):
            GeneratorOptions.model_validate(
                {"silentInstall": value, "continueOnError": True, "includeMsStoreApps": False}
            )

    def test_all_fields_required(self) -> None:
        """Missing options are rejected."""
        with pytest.raises(ValidationError):
            GeneratorOptions.model_validate({"silentInstall": True})
