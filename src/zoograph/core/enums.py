"""
Enumerations shared across the zoo graph core.

This module defines the closed vocabularies used by the models and by the
query and admission results:
- AnimalCategory: biological classification used by the compatibility rules
- PathStatus: outcome of a route query
- AdmissionDecision: outcome of an admission check
"""

from enum import Enum
from typing import Optional, Union


class AnimalCategory(Enum):
    """Biological classification of an animal."""

    MAMMAL = "Mammal"
    BIRD = "Bird"
    REPTILE = "Reptile"
    FISH = "Fish"
    AMPHIBIAN = "Amphibian"
    INSECT = "Insect"
    ARACHNID = "Arachnid"

    @classmethod
    def parse(cls, value: Union[str, "AnimalCategory"]) -> Optional["AnimalCategory"]:
        """
        Resolve a category from its value or member name.

        Matching is case-insensitive, so "Mammal", "mammal" and "MAMMAL"
        all resolve to AnimalCategory.MAMMAL.

        Args:
            value: Category member or string

        Returns:
            The matching category, or None if the value is unknown
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().casefold()
        for member in cls:
            if wanted in (member.value.casefold(), member.name.casefold()):
                return member
        return None


class PathStatus(Enum):
    """Outcome of a route query between two nodes."""

    FOUND = "found"
    NO_PATH = "no_path"
    NODE_NOT_FOUND = "node_not_found"
    INVALID = "invalid"


class AdmissionDecision(Enum):
    """Outcome of checking whether an animal may enter an aviary."""

    ADMITTED = "admitted"
    MISSING = "missing"
    DUPLICATE = "duplicate"
    ALREADY_PLACED = "already_placed"
    FULL = "full"
    INCOMPATIBLE = "incompatible"

    @property
    def allowed(self) -> bool:
        """Whether the decision permits admission."""
        return self is AdmissionDecision.ADMITTED
