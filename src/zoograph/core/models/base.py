"""
Core domain models base module for the zoo graph system.

This module provides the validation helpers and identifier generation shared
by the node, edge, animal and caretaker models.
"""

import math
import uuid
from typing import Any


def new_identifier() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


def validate_identifier(name: str, value: Any) -> None:
    """Validate that an identifier is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")


def validate_non_negative(name: str, value: Any) -> None:
    """Validate that a value is a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a numeric value")
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"{name} must be a finite number")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_count(name: str, value: Any) -> None:
    """Validate that a value is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
