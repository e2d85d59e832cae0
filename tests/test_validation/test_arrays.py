"""
Tests for array constraints: items, additionalItems, minItems, maxItems,
uniqueItems.
"""

from schemaguard.validation import validate


def props(errors):
    return [e.property for e in errors]


class TestItems:
    """Tests for items in list and tuple mode."""

    def test_single_schema_applies_to_every_element(self):
        errors = validate({"items": {"type": "number"}}, [1, "a", 2, "b"])
        assert [(e.path, e.property) for e in errors] == [
            ("root.1", "type"),
            ("root.3", "type"),
        ]

    def test_tuple_mode_positions(self):
        schema = {"items": [{"type": "string"}, {"type": "number"}]}
        assert validate(schema, ["a", 1]) == []
        errors = validate(schema, [1, "a"])
        assert [e.path for e in errors] == ["root.0", "root.1"]

    def test_tuple_additional_items_absent_is_permissive(self):
        schema = {"items": [{"type": "string"}]}
        assert validate(schema, ["a", 1, None]) == []

    def test_tuple_additional_items_true(self):
        schema = {"items": [{"type": "string"}], "additionalItems": True}
        assert validate(schema, ["a", 1, 2]) == []

    def test_tuple_additional_items_false_reports_once(self):
        schema = {"items": [{"type": "string"}], "additionalItems": False}
        errors = validate(schema, ["a", 1, 2])
        assert len(errors) == 1
        assert errors[0].property == "additionalItems"
        assert errors[0].path == "root"

    def test_tuple_additional_items_schema(self):
        schema = {"items": [{"type": "string"}], "additionalItems": {"type": "number"}}
        errors = validate(schema, ["a", 1, "b"])
        assert [(e.path, e.property) for e in errors] == [("root.2", "type")]

    def test_nested_array_paths(self):
        schema = {"items": {"items": {"type": "number"}}}
        errors = validate(schema, [[1], [2, "x"]])
        assert errors[0].path == "root.1.1"


class TestCardinality:
    """Tests for minItems / maxItems."""

    def test_min_items(self):
        errors = validate({"minItems": 2}, [1])
        assert errors[0].message == "Value must have at least 2 items"

    def test_max_items(self):
        errors = validate({"maxItems": 1}, [1, 2])
        assert errors[0].message == "Value must have at most 1 items"

    def test_bounds_inclusive(self):
        assert validate({"minItems": 2, "maxItems": 2}, [1, 2]) == []


class TestUniqueItems:
    """Tests for uniqueItems."""

    def test_duplicate_reports_single_error(self):
        schema = {"type": "array", "items": {"type": "number"}, "uniqueItems": True}
        errors = validate(schema, [1, 2, 2])
        assert props(errors) == ["uniqueItems"]

    def test_stops_at_first_duplicate(self):
        errors = validate({"uniqueItems": True}, [1, 1, 2, 2, 3, 3])
        assert len(errors) == 1
        assert errors[0].errorcount == 1

    def test_structural_duplicates(self):
        errors = validate({"uniqueItems": True}, [{"a": 1, "b": 2}, {"b": 2, "a": 1}])
        assert props(errors) == ["uniqueItems"]

    def test_unique_passes(self):
        assert validate({"uniqueItems": True}, [1, "1", True, None]) == []

    def test_unique_items_false_not_checked(self):
        assert validate({"uniqueItems": False}, [1, 1]) == []
