"""
Schema validation for persisted records.

This module provides JSON schema-based validation for the records that storage
adapters read back. It supports:
- Registration of JSON schemas per record kind
- Validation of records against their registered schema
- A default validator preloaded with the aviary, path, animal and caretaker
  record schemas

Records are validated before they are converted into models, so malformed
rows are reported and skipped instead of aborting a load.
"""

from enum import Enum
from typing import Any, Dict, Mapping

from jsonschema import Draft7Validator

from ...core.enums import AnimalCategory
from .base import ValidationResult


class RecordKind(Enum):
    """Kinds of persisted records."""

    AVIARY = "aviary"
    PATH = "path"
    ANIMAL = "animal"
    CARETAKER = "caretaker"


_IDENTIFIER = {"type": "string", "minLength": 1}
_OPTIONAL_IDENTIFIER = {"anyOf": [_IDENTIFIER, {"type": "null"}]}
_NON_NEGATIVE = {"type": "number", "minimum": 0}
_COUNT = {"type": "integer", "minimum": 0}

AVIARY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": _IDENTIFIER,
        "name": {"type": "string", "minLength": 1},
        "category": {"type": "string"},
        "area": _NON_NEGATIVE,
        "capacity": _COUNT,
        "caretaker_id": _OPTIONAL_IDENTIFIER,
    },
    "required": ["id", "name", "category", "area", "capacity"],
}

PATH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "from_id": _IDENTIFIER,
        "to_id": _IDENTIFIER,
        "length": {"type": "number", "exclusiveMinimum": 0},
    },
    "required": ["from_id", "to_id", "length"],
}

ANIMAL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": _IDENTIFIER,
        "name": {"type": "string", "minLength": 1},
        "species": {"type": "string", "minLength": 1},
        "category": {"enum": [member.value for member in AnimalCategory]},
        "age": _COUNT,
        "weight": _NON_NEGATIVE,
        "aviary_id": _OPTIONAL_IDENTIFIER,
        "is_fed": {"type": "boolean"},
    },
    "required": ["id", "name", "species", "category", "age", "weight"],
}

CARETAKER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": _IDENTIFIER,
        "name": {"type": "string", "minLength": 1},
        "age": _COUNT,
        "salary": _NON_NEGATIVE,
        "experience": _COUNT,
        "aviary_ids": {"type": "array", "items": _IDENTIFIER, "uniqueItems": True},
    },
    "required": ["id", "name", "age", "salary", "experience"],
}


class SchemaValidator:
    """
    JSON Schema-based validator for persisted records.

    Attributes:
        schemas (Dict[RecordKind, Dict[str, Any]]): Dictionary mapping record
            kinds to their JSON schemas
    """

    def __init__(self):
        """
        Initialize an empty schema validator.

        Schemas can be registered using the register_schema method, or use
        default_validator() for one preloaded with the record schemas.
        """
        self.schemas: Dict[RecordKind, Dict[str, Any]] = {}

    def register_schema(self, kind: RecordKind, schema: Dict[str, Any]) -> None:
        """
        Register a JSON schema for a record kind.

        Args:
            kind: Kind of record this schema applies to
            schema: JSON schema definition as a dictionary
        """
        Draft7Validator.check_schema(schema)
        self.schemas[kind] = schema

    def validate(self, kind: RecordKind, record: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a record against the schema registered for its kind.

        If no schema is registered for the kind, the record is accepted and a
        warning is included in the validation result.

        Args:
            kind: Kind of the record
            record: Record to validate

        Returns:
            ValidationResult containing validation details and any errors or warnings

        Example:
            >>> validator = default_validator()
            >>> result = validator.validate(RecordKind.PATH, {"from_id": "a"})
            >>> result.is_valid
            False
        """
        errors = []
        warnings = []

        schema = self.schemas.get(kind)
        if schema is None:
            warnings.append(f"No schema registered for record kind: {kind.value}")
        else:
            validator = Draft7Validator(schema)
            for error in sorted(validator.iter_errors(record), key=lambda e: list(e.path)):
                location = ".".join(str(part) for part in error.path) or "<record>"
                errors.append(f"{location}: {error.message}")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            context={"kind": kind.value},
        )


def default_validator() -> SchemaValidator:
    """Create a validator with every record schema registered."""
    validator = SchemaValidator()
    validator.register_schema(RecordKind.AVIARY, AVIARY_SCHEMA)
    validator.register_schema(RecordKind.PATH, PATH_SCHEMA)
    validator.register_schema(RecordKind.ANIMAL, ANIMAL_SCHEMA)
    validator.register_schema(RecordKind.CARETAKER, CARETAKER_SCHEMA)
    return validator
