"""
Validation package for the zoo graph system.

Provides the ValidationResult container and JSON schema validation of
persisted records.
"""

from .base import ValidationResult
from .schema import RecordKind, SchemaValidator, default_validator

__all__ = [
    "RecordKind",
    "SchemaValidator",
    "ValidationResult",
    "default_validator",
]
