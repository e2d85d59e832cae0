"""
Tests for custom validators and the built-in IP address validator.
"""

from schemaguard.messages import default_translator
from schemaguard.validation import (
    IPAddressValidator,
    ErrorKind,
    ValidationError,
    Validator,
    register_validator,
    registered_validators,
    unregister_validator,
    validate,
)


def no_admin(schema, value, path):
    if schema.get("format") == "username" and value == "admin":
        return [{"path": path, "property": "format", "message": "Reserved name"}]
    return []


class TestIPAddressValidator:
    """Tests for ipv4/ipv6 formats."""

    def test_valid_ipv4(self):
        assert validate({"type": "string", "format": "ipv4"}, "192.168.0.1") == []

    def test_invalid_ipv4(self):
        errors = validate({"type": "string", "format": "ipv4"}, "256.1.1.1")
        assert [e.property for e in errors] == ["format"]
        assert errors[0].message.startswith("Value must be a valid IPv4 address")

    def test_valid_ipv6(self):
        assert validate({"type": "string", "format": "ipv6"}, "::1") == []

    def test_invalid_ipv6(self):
        errors = validate({"type": "string", "format": "ipv6"}, "12345::")
        assert errors[0].message == "Value must be a valid IPv6 address"

    def test_requires_string_type(self):
        assert validate({"format": "ipv4"}, "nope") == []

    def test_direct_call(self):
        check = IPAddressValidator(default_translator())
        assert check({"type": "string", "format": "ipv4"}, "10.0.0.1", "root") == []


class TestGlobalRegistry:
    """Tests for register_validator / unregister_validator."""

    def test_registered_validator_runs(self):
        register_validator(no_admin)
        errors = validate({"type": "string", "format": "username"}, "admin")
        assert errors == [ValidationError("root", "format", "Reserved name")]
        assert errors[0].kind == ErrorKind.FORMAT_VIOLATION

    def test_registration_is_idempotent(self):
        register_validator(no_admin)
        register_validator(no_admin)
        assert registered_validators() == [no_admin]

    def test_unregister(self):
        register_validator(no_admin)
        unregister_validator(no_admin)
        unregister_validator(no_admin)
        assert registered_validators() == []
        assert validate({"format": "username"}, "admin") == []


class TestInstanceValidators:
    """Tests for validators passed to a Validator."""

    def test_instance_validators_run_after_global(self):
        calls = []

        def first(schema, value, path):
            calls.append("global")
            return []

        def second(schema, value, path):
            calls.append("instance")
            return [ValidationError(path, "even", "Must be even")]

        register_validator(first)
        errors = Validator({"type": "integer"}, custom_validators=[second]).validate(3)
        assert calls == ["global", "instance"]
        assert errors[0].kind == ErrorKind.CUSTOM_VALIDATOR_FAILURE

    def test_runs_for_nested_values(self):
        seen = []

        def record(schema, value, path):
            seen.append(path)
            return []

        schema = {"properties": {"a": {}, "b": {"items": {}}}}
        Validator(schema, custom_validators=[record]).validate({"a": 1, "b": [1, 2]})
        assert seen == ["root.a", "root.b.0", "root.b.1", "root.b", "root"]
