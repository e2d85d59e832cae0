"""
Validator settings models.

Pydantic models for validating validator configuration, either passed
directly or loaded from a YAML settings file.

Example YAML:
    ```yaml
    required_by_default: true
    no_additional_properties: false
    strict: false
    numeric_backend: decimal
    base_uri: "https://example.com/forms/"
    ```
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NumericBackendName(str, Enum):
    """Arithmetic used for range and divisibility checks."""

    FLOAT = "float"  # Native floating point (default, legacy behavior)
    DECIMAL = "decimal"  # Exact decimal arithmetic


class ValidatorSettings(BaseModel):
    """
    Options controlling a Validator.

    Attributes:
        required_by_default: Treat schemas without ``required`` as required (legacy draft 3)
        no_additional_properties: Treat absent ``additionalProperties`` as false,
            unless the schema also uses ``oneOf``/``anyOf``
        strict: Raise SchemaConfigurationError on malformed constraint arguments
            instead of skipping them
        max_depth: Maximum nested validation depth before SchemaRecursionError.
            Each nested schema and each nested array item or object member
            counts, so it also bounds how deeply a document may nest
        numeric_backend: Backend used for numeric comparisons
        language: Message catalog language
        base_uri: Prefix for ``describedby`` link hrefs and relative ``$ref``s
    """

    model_config = ConfigDict(extra="forbid", use_enum_values=False)

    required_by_default: bool = Field(
        False, description="Treat schemas without 'required' as required"
    )
    no_additional_properties: bool = Field(
        False, description="Default 'additionalProperties' to false"
    )
    strict: bool = Field(
        False, description="Raise on malformed constraint arguments"
    )
    max_depth: int = Field(
        128, ge=1, le=10000, description="Maximum combined schema and document nesting depth"
    )
    numeric_backend: NumericBackendName = Field(
        NumericBackendName.FLOAT, description="Numeric comparison backend"
    )
    language: str = Field("en", description="Message catalog language")
    base_uri: str = Field("", description="Base URI for link and $ref expansion")

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Lowercase the language code and reject empty values."""
        v = v.strip().lower()
        if not v:
            raise ValueError("language must not be empty")
        return v

    def merge(self, **overrides: Any) -> "ValidatorSettings":
        """
        Return a copy with the given non-None overrides applied.

        Args:
            **overrides: Field values taking precedence over these settings

        Returns:
            New ValidatorSettings instance
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ValidatorSettings(**data)

    @classmethod
    def from_yaml(
        cls, source: Union[str, Path, Mapping[str, Any], None]
    ) -> "ValidatorSettings":
        """
        Parse settings from a YAML file path or an already-loaded mapping.

        Args:
            source: Path to a YAML file, a mapping, or None for defaults

        Returns:
            ValidatorSettings instance

        Raises:
            pydantic.ValidationError: If a field is invalid
            ValueError: If the YAML document is not a mapping
        """
        if source is None:
            return cls()
        if isinstance(source, Mapping):
            data: Dict[str, Any] = dict(source)
        else:
            loaded = yaml.safe_load(Path(source).read_text(encoding="utf-8"))
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError(
                    f"Settings file must contain a mapping, got {type(loaded).__name__}"
                )
            data = loaded
        # Accept the camelCase spelling used by form definitions
        aliases = {
            "requiredByDefault": "required_by_default",
            "noAdditionalProperties": "no_additional_properties",
        }
        normalized = {aliases.get(k, k): v for k, v in data.items()}
        return cls(**normalized)
