"""
Animal model for the zoo graph system.

Animals are resources created independently of any aviary. An animal gains an
``aviary_id`` only once the admission controller has placed it.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..enums import AnimalCategory
from .base import (
    new_identifier,
    validate_count,
    validate_identifier,
    validate_non_negative,
)


@dataclass
class Animal:
    """
    Animal resource living in the animal arena.

    Attributes:
        name (str): Display name
        species (str): Species name, matched exactly by the compatibility rules
        category (AnimalCategory): Biological classification
        age (int): Age in years
        weight (float): Weight in kilograms
        id (str): Unique identifier, generated when omitted
        aviary_id (Optional[str]): Aviary currently holding the animal
        is_fed (bool): Whether the animal has been fed today
    """

    name: str
    species: str
    category: AnimalCategory
    age: int = 0
    weight: float = 0.0
    id: str = field(default_factory=new_identifier)
    aviary_id: Optional[str] = None
    is_fed: bool = False

    def __post_init__(self):
        """Validate animal after initialization."""
        validate_identifier("id", self.id)
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.species, str) or not self.species.strip():
            raise ValueError("species must be a non-empty string")
        if not isinstance(self.category, AnimalCategory):
            raise TypeError("category must be an AnimalCategory")
        validate_count("age", self.age)
        validate_non_negative("weight", self.weight)
        if self.aviary_id is not None:
            validate_identifier("aviary_id", self.aviary_id)

    @property
    def is_placed(self) -> bool:
        """Whether the animal currently occupies an aviary."""
        return self.aviary_id is not None

    def feed(self) -> bool:
        """Mark the animal as fed; returns False if it already was."""
        if self.is_fed:
            return False
        self.is_fed = True
        return True
