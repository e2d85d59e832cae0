"""
Tests for date, time and datetime-local formats.
"""

import datetime

import pytest

from schemaguard.validation import Validator, validate


class TestDatePatterns:
    """String values checked against the built-in patterns."""

    @pytest.mark.parametrize("fmt,value", [
        ("date", "2024-02-29"),
        ("date", "2024/02/29"),
        ("date", ""),
        ("time", "12:30"),
        ("time", "12:30:15"),
        ("datetime-local", "2024-02-29T12:30"),
        ("datetime-local", "2024-02-29 12:30:59"),
    ])
    def test_valid(self, fmt, value):
        assert validate({"type": "string", "format": fmt}, value) == []

    @pytest.mark.parametrize("fmt,value,message", [
        ("date", "29.02.2024", 'Date must be in the format "YYYY-MM-DD"'),
        ("time", "12h30", 'Time must be in the format "HH:MM"'),
        ("datetime-local", "2024-02-29", 'Datetime must be in the format "YYYY-MM-DD HH:MM"'),
    ])
    def test_invalid(self, fmt, value, message):
        errors = validate({"type": "string", "format": fmt}, value)
        assert len(errors) == 1
        assert errors[0].property == "format"
        assert errors[0].message == message

    def test_trailing_newline_rejected(self):
        assert validate({"format": "date"}, "2024-01-01\n") != []


class TestEpoch:
    """Integer-typed date formats carry epoch timestamps."""

    def test_positive_epoch_valid(self):
        assert validate({"type": "integer", "format": "datetime-local"}, 1700000000) == []

    def test_zero_epoch_invalid(self):
        errors = validate({"type": "integer", "format": "date"}, 0)
        assert [e.message for e in errors] == ["Date must be greater than 1 January 1970"]

    def test_fractional_epoch_invalid(self):
        errors = validate({"type": "integer", "format": "date"}, 1700000000.5)
        assert [e.message for e in errors] == ["Date must be greater than 1 January 1970"]

    def test_numeric_string_epoch(self):
        assert validate({"type": "integer", "format": "time"}, "1700000000") == []

    def test_huge_integer_epoch(self):
        assert validate({"type": "integer", "format": "date"}, 10 ** 400) == []

    def test_huge_numeric_string_epoch(self):
        errors = validate({"type": "integer", "format": "date"}, "1" + "0" * 400)
        assert errors == []

    def test_string_on_integer_schema(self):
        errors = validate({"type": "integer", "format": "date"}, "2024-01-01")
        assert errors[-1].message == 'Date must be in the format "YYYY-MM-DD"'


class TestRichFormatHook:
    """The rich format hook replaces pattern matching."""

    @staticmethod
    def iso_date(value):
        datetime.date.fromisoformat(value)
        return True

    def test_hook_accepts(self):
        validator = Validator({"format": "date"}, rich_format_validator=lambda path: self.iso_date)
        assert validator.validate("2024-02-29") == []

    def test_hook_rejects_via_exception(self):
        validator = Validator({"format": "date"}, rich_format_validator=lambda path: self.iso_date)
        errors = validator.validate("2023-02-29")
        assert [e.property for e in errors] == ["format"]

    def test_hook_accepts_empty_string(self):
        validator = Validator({"format": "date"}, rich_format_validator=lambda path: lambda v: False)
        assert validator.validate("") == []

    def test_hook_none_falls_back_to_pattern(self):
        validator = Validator({"format": "date"}, rich_format_validator=lambda path: None)
        assert validator.validate("not a date") != []
