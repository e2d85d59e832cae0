"""
Tests for message catalogs.
"""

import pytest

from schemaguard.messages import MessageCatalog, default_translator


class TestMessageCatalog:
    """Tests for MessageCatalog."""

    def test_bundled_english(self):
        catalog = MessageCatalog.load("en")
        assert catalog.translate("error_notempty") == "Value required"
        assert catalog("error_type", ["string"]) == "Value must be of type string"

    def test_one_of_count(self):
        message = default_translator()("error_oneOf", [2])
        assert message.endswith("It currently validates against 2 of the schemas.")

    def test_unknown_key_passes_through(self):
        assert default_translator()("Custom text") == "Custom text"

    def test_overrides(self):
        catalog = MessageCatalog.load("en", overrides={"error_enum": "Pick one of the options"})
        assert catalog("error_enum") == "Pick one of the options"
        assert catalog("error_notempty") == "Value required"

    def test_custom_catalog(self):
        catalog = MessageCatalog({"error_minLength": "Mindestens {{ args[0] }} Zeichen"}, language="de")
        assert catalog("error_minLength", [3]) == "Mindestens 3 Zeichen"

    def test_invalid_template_returns_source(self):
        catalog = MessageCatalog({"broken": "{{ args[0 }}"})
        assert catalog("broken", [1]) == "{{ args[0 }}"

    def test_missing_language(self):
        with pytest.raises(FileNotFoundError):
            MessageCatalog.load("xx")

    def test_default_translator_cached(self):
        assert default_translator("en") is default_translator("en")

    @pytest.mark.parametrize("key", [
        "error_notset", "error_notempty", "error_enum", "error_anyOf", "error_oneOf",
        "error_not", "error_type_union", "error_type", "error_disallow_union",
        "error_disallow", "error_multipleOf", "error_maximum_excl", "error_maximum_incl",
        "error_minimum_excl", "error_minimum_incl", "error_maxLength", "error_minLength",
        "error_pattern", "error_additionalItems", "error_maxItems", "error_minItems",
        "error_uniqueItems", "error_maxProperties", "error_minProperties", "error_required",
        "error_additional_properties", "error_dependency", "error_date", "error_time",
        "error_datetime_local", "error_invalid_epoch", "error_ipv4", "error_ipv6",
    ])
    def test_all_keys_present(self, key):
        assert key in default_translator().messages
