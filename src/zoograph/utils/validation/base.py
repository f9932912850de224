"""
Base validation components for the zoo graph system.

This module provides the ValidationResult container used to report the outcome
of validating persisted records before they are turned into models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationResult:
    """
    Container for validation results.

    Attributes:
        is_valid (bool): Whether the validation passed successfully
        errors (List[str]): List of validation error messages
        warnings (List[str]): List of validation warning messages
        context (Optional[Dict[str, Any]]): Additional context about the validation
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None

    def summary(self) -> str:
        """Join the error messages into a single line for logging."""
        return "; ".join(self.errors) if self.errors else "valid"
