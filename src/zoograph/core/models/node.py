"""
Node models for the zoo graph system.

This module defines the models representing vertices in the graph: the
identity-only Node and the Aviary, a capacity-bounded enclosure that holds
the ids of the animals living in it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .base import (
    new_identifier,
    validate_count,
    validate_identifier,
    validate_non_negative,
)


@dataclass
class Node:
    """
    Base node model representing a vertex in the graph.

    Attributes:
        id (str): Unique, immutable identifier
    """

    id: str

    def __post_init__(self):
        """Validate node after initialization."""
        validate_identifier("id", self.id)


@dataclass
class Aviary(Node):
    """
    Enclosure node holding a bounded set of animals.

    The aviary stores animal ids only; the animals themselves live in the
    animal arena. Occupancy is changed exclusively through the admission
    controller, which keeps ``occupant_ids`` and each animal's ``aviary_id``
    in step.

    Attributes:
        name (str): Display name
        category (str): Habitat type (e.g. "Savannah", "Tropical Zone")
        area (float): Floor area in square metres
        capacity (int): Maximum number of occupants
        occupant_ids (List[str]): Ordered ids of current occupants
        caretaker_id (Optional[str]): Assigned caretaker, if any
    """

    name: str = ""
    category: str = ""
    area: float = 0.0
    capacity: int = 0
    occupant_ids: List[str] = field(default_factory=list)
    caretaker_id: Optional[str] = None

    def __post_init__(self):
        """Validate aviary after initialization."""
        super().__post_init__()
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        validate_non_negative("area", self.area)
        validate_count("capacity", self.capacity)
        if len(set(self.occupant_ids)) != len(self.occupant_ids):
            raise ValueError("occupant_ids must not contain duplicates")
        if len(self.occupant_ids) > self.capacity:
            raise ValueError("occupant_ids exceeds capacity")

    @classmethod
    def create(
        cls, name: str, category: str, area: float, capacity: int
    ) -> "Aviary":
        """Create a new, empty aviary with a generated id."""
        return cls(
            id=new_identifier(),
            name=name,
            category=category,
            area=area,
            capacity=capacity,
        )

    @property
    def occupancy(self) -> int:
        """Number of current occupants."""
        return len(self.occupant_ids)

    @property
    def is_full(self) -> bool:
        """Whether the aviary has reached its capacity."""
        return self.occupancy >= self.capacity

    def contains(self, animal_id: str) -> bool:
        """Check whether an animal is an occupant."""
        return animal_id in self.occupant_ids
