"""
Tests for ValidatorSettings.
"""

import pytest
from pydantic import ValidationError as SettingsError

from schemaguard.settings import NumericBackendName, ValidatorSettings


class TestValidatorSettings:
    """Tests for field defaults and validation."""

    def test_defaults(self):
        settings = ValidatorSettings()
        assert settings.required_by_default is False
        assert settings.no_additional_properties is False
        assert settings.strict is False
        assert settings.max_depth == 128
        assert settings.numeric_backend == NumericBackendName.FLOAT
        assert settings.language == "en"
        assert settings.base_uri == ""

    def test_backend_from_string(self):
        assert ValidatorSettings(numeric_backend="decimal").numeric_backend == NumericBackendName.DECIMAL

    def test_unknown_backend_rejected(self):
        with pytest.raises(SettingsError):
            ValidatorSettings(numeric_backend="fixed")

    def test_unknown_field_rejected(self):
        with pytest.raises(SettingsError):
            ValidatorSettings(requiredByDefault=True)

    @pytest.mark.parametrize("depth", [0, 10001])
    def test_max_depth_bounds(self, depth):
        with pytest.raises(SettingsError):
            ValidatorSettings(max_depth=depth)

    def test_max_depth_describes_document_nesting(self):
        description = ValidatorSettings.model_fields["max_depth"].description
        assert "document" in description

    def test_language_normalized(self):
        assert ValidatorSettings(language=" EN ").language == "en"

    def test_empty_language_rejected(self):
        with pytest.raises(SettingsError):
            ValidatorSettings(language="  ")


class TestMerge:
    """Tests for ValidatorSettings.merge."""

    def test_none_overrides_ignored(self):
        settings = ValidatorSettings(strict=True).merge(strict=None, max_depth=10)
        assert settings.strict is True
        assert settings.max_depth == 10

    def test_merge_returns_copy(self):
        base = ValidatorSettings()
        merged = base.merge(required_by_default=True)
        assert merged.required_by_default is True
        assert base.required_by_default is False


class TestFromYaml:
    """Tests for ValidatorSettings.from_yaml."""

    def test_none_gives_defaults(self):
        assert ValidatorSettings.from_yaml(None) == ValidatorSettings()

    def test_mapping_with_camel_case(self):
        settings = ValidatorSettings.from_yaml({"requiredByDefault": True, "strict": True})
        assert settings.required_by_default is True
        assert settings.strict is True

    def test_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("noAdditionalProperties: true\nnumeric_backend: decimal\n")
        settings = ValidatorSettings.from_yaml(path)
        assert settings.no_additional_properties is True
        assert settings.numeric_backend == NumericBackendName.DECIMAL

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert ValidatorSettings.from_yaml(str(path)) == ValidatorSettings()

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- strict\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            ValidatorSettings.from_yaml(path)
