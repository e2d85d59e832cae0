"""
Tests for the recursive validator: absent values, references, describedby
links, recursion limits, strict mode and the Validator facade.
"""

import copy

import pytest

from schemaguard.exceptions import (
    InvalidValueError,
    SchemaConfigurationError,
    SchemaRecursionError,
    UnresolvableReferenceError,
)
from schemaguard.schema import RefResolver
from schemaguard.settings import ValidatorSettings
from schemaguard.validation import UNDEFINED, Validator, validate


def props(errors):
    return [e.property for e in errors]


class TestAbsentValues:
    """UNDEFINED values only check the legacy boolean required."""

    def test_absent_value_skips_everything_else(self):
        schema = {"type": "string", "minLength": 3, "enum": ["abc"]}
        assert Validator(schema).validate() == []

    def test_absent_required_value(self):
        errors = validate({"type": "string", "required": True}, UNDEFINED)
        assert [(e.path, e.property, e.message) for e in errors] == [
            ("root", "required", "Property must be set"),
        ]

    def test_undefined_is_falsy_singleton(self):
        assert not UNDEFINED
        assert repr(UNDEFINED) == "UNDEFINED"
        assert copy.deepcopy(UNDEFINED) is UNDEFINED

    def test_null_is_a_value(self):
        assert props(validate({"type": "string"}, None)) == ["type"]
        assert validate({"type": "null"}, None) == []

    def test_null_skips_kind_keywords(self):
        schema = {"minLength": 3, "minimum": 2, "minItems": 1, "minProperties": 1}
        assert validate(schema, None) == []


class TestReferences:
    """Tests for $ref expansion."""

    def test_local_pointer(self):
        schema = {
            "definitions": {"name": {"type": "string", "minLength": 2}},
            "properties": {"n": {"$ref": "#/definitions/name"}},
        }
        errors = validate(schema, {"n": "a"})
        assert [(e.path, e.property) for e in errors] == [("root.n", "minLength")]

    def test_local_keywords_win(self):
        schema = {
            "definitions": {"name": {"type": "string", "minLength": 2}},
            "properties": {"n": {"$ref": "#/definitions/name", "minLength": 1}},
        }
        assert validate(schema, {"n": "a"}) == []

    def test_registered_document(self):
        refs = {"address.json": {"required": ["zip"]}}
        schema = {"properties": {"home": {"$ref": "address.json"}}}
        errors = validate(schema, {"home": {}}, refs=refs)
        assert [(e.path, e.property) for e in errors] == [("root.home", "required")]

    def test_unresolvable_forgiving(self):
        schema = {"$ref": "#/definitions/missing", "type": "string"}
        assert props(validate(schema, 1)) == ["type"]

    def test_unresolvable_strict(self):
        with pytest.raises(UnresolvableReferenceError):
            validate({"$ref": "missing.json"}, 1, strict=True)

    def test_ref_cycle(self):
        schema = {"definitions": {"a": {"$ref": "#/definitions/b"}, "b": {"$ref": "#/definitions/a"}},
                  "$ref": "#/definitions/a"}
        with pytest.raises(SchemaRecursionError):
            validate(schema, 1)


class TestDescribedByLinks:
    """Tests for describedby links."""

    def test_link_rendered_from_root_value(self):
        refs = {"car.json": {"properties": {"wheels": {"type": "integer"}}}}
        schema = {"links": [{"rel": "describedby", "href": "{{ kind }}.json"}]}
        errors = validate(schema, {"kind": "car", "wheels": "four"}, refs=refs)
        assert [(e.path, e.property) for e in errors] == [("root.wheels", "type")]

    def test_link_with_base_uri(self):
        refs = {"https://forms.example/car.json": {"required": ["wheels"]}}
        schema = {"links": [{"rel": "DescribedBy", "href": "{{ kind }}.json"}]}
        errors = validate(
            schema, {"kind": "car"}, refs=refs, base_uri="https://forms.example/"
        )
        assert props(errors) == ["required"]

    def test_other_links_ignored(self):
        schema = {"links": [{"rel": "self", "href": "nowhere.json"}]}
        assert validate(schema, {}, strict=True) == []

    def test_unresolvable_link_forgiving(self):
        schema = {"links": [{"rel": "describedby", "href": "nowhere.json"}]}
        assert validate(schema, {}) == []

    def test_unresolvable_link_strict(self):
        schema = {"links": [{"rel": "describedby", "href": "nowhere.json"}]}
        with pytest.raises(UnresolvableReferenceError):
            validate(schema, {}, strict=True)

    def test_shared_resolver(self):
        resolver = RefResolver()
        resolver.register("plain.json", {"type": "object"})
        schema = {"links": [{"rel": "describedby", "href": "plain.json"}]}
        assert Validator(schema, resolver=resolver).validate({}) == []


class TestRecursionLimit:
    """Cyclic schemas and deeply nested documents are stopped by max_depth."""

    def test_cyclic_all_of(self):
        schema = {
            "definitions": {"loop": {"allOf": [{"$ref": "#/definitions/loop"}]}},
            "allOf": [{"$ref": "#/definitions/loop"}],
        }
        with pytest.raises(SchemaRecursionError):
            validate(schema, 1, max_depth=20)

    def test_deep_but_finite_schema(self):
        schema = {}
        value = 1
        for _ in range(10):
            schema = {"properties": {"x": schema}}
            value = {"x": value}
        assert validate(schema, value, max_depth=20) == []

    def test_too_deep_schema(self):
        schema = {}
        value = 1
        for _ in range(10):
            schema = {"properties": {"x": schema}}
            value = {"x": value}
        with pytest.raises(SchemaRecursionError):
            validate(schema, value, max_depth=5)

    def _nested_list(self, levels):
        value = []
        for _ in range(levels):
            value = [value]
        return value

    def test_document_nesting_counts_toward_limit(self):
        schema = {
            "definitions": {"node": {"type": "array", "items": {"$ref": "#/definitions/node"}}},
            "$ref": "#/definitions/node",
        }
        assert validate(schema, self._nested_list(60)) == []
        with pytest.raises(SchemaRecursionError):
            validate(schema, self._nested_list(200))

    def test_document_nesting_within_raised_limit(self):
        schema = {
            "definitions": {"node": {"type": "array", "items": {"$ref": "#/definitions/node"}}},
            "$ref": "#/definitions/node",
        }
        with pytest.raises(SchemaRecursionError):
            validate(schema, self._nested_list(40), max_depth=30)
        assert validate(schema, self._nested_list(40), max_depth=50) == []


class TestStrictMode:
    """Malformed constraint arguments."""

    @pytest.mark.parametrize("schema,value", [
        ({"enum": "abc"}, "a"),
        ({"minimum": "5"}, 1),
        ({"multipleOf": 0}, 4),
        ({"pattern": "(unclosed"}, "x"),
        ({"items": 3}, [1]),
        ({"properties": []}, {}),
        ({"additionalProperties": "no"}, {"a": 1}),
        ({"allOf": {"type": "string"}}, 1),
    ])
    def test_forgiving_skips(self, schema, value):
        assert validate(schema, value) == []

    @pytest.mark.parametrize("schema,value", [
        ({"enum": "abc"}, "a"),
        ({"minimum": "5"}, 1),
        ({"multipleOf": 0}, 4),
        ({"pattern": "(unclosed"}, "x"),
        ({"items": 3}, [1]),
        ({"properties": []}, {}),
        ({"additionalProperties": "no"}, {"a": 1}),
        ({"allOf": {"type": "string"}}, 1),
    ])
    def test_strict_raises(self, schema, value):
        with pytest.raises(SchemaConfigurationError):
            validate(schema, value, strict=True)


class TestValidatorFacade:
    """Tests for Validator convenience methods."""

    def test_is_valid(self):
        validator = Validator({"type": "integer"})
        assert validator.is_valid(3)
        assert not validator.is_valid("3")

    def test_assert_valid_raises(self):
        validator = Validator({"type": "integer", "minimum": 5})
        with pytest.raises(InvalidValueError) as exc_info:
            validator.assert_valid(1.5)
        assert props(exc_info.value.errors) == ["type", "minimum"]
        assert exc_info.value.to_dict()["success"] is False

    def test_assert_valid_passes(self):
        Validator({"type": "integer"}).assert_valid(5)

    def test_settings_object_and_overrides(self):
        settings = ValidatorSettings(strict=True)
        validator = Validator({}, settings, strict=False)
        assert validator.settings.strict is False
        assert settings.strict is True

    def test_schema_not_mutated(self):
        schema = {
            "definitions": {"s": {"type": "string"}},
            "properties": {"a": {"$ref": "#/definitions/s"}},
            "links": [{"rel": "describedby", "href": "x.json"}],
            "required": ["a"],
        }
        snapshot = copy.deepcopy(schema)
        validate(schema, {"a": 1}, refs={"x.json": {"required": ["b"]}})
        assert schema == snapshot

    def test_custom_translator(self):
        def translate(key, args=None):
            return key

        errors = Validator({"type": "string"}, translate=translate).validate(1)
        assert errors[0].message == "error_type"

    def test_repr(self):
        assert repr(Validator({})) == "Validator(backend='float', strict=False)"
