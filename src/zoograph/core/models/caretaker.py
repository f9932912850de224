"""
Caretaker model for the zoo graph system.
"""

from dataclasses import dataclass, field
from typing import List

from .base import (
    new_identifier,
    validate_count,
    validate_identifier,
    validate_non_negative,
)


@dataclass
class Caretaker:
    """
    Staff member responsible for a set of aviaries.

    Only aviary-id bookkeeping is modelled; an aviary has at most one
    caretaker, which the caretaker manager enforces.

    Attributes:
        name (str): Full name
        age (int): Age in years
        salary (float): Monthly salary
        experience (int): Years of experience
        id (str): Unique identifier, generated when omitted
        aviary_ids (List[str]): Ordered ids of the aviaries in their care
    """

    name: str
    age: int = 0
    salary: float = 0.0
    experience: int = 0
    id: str = field(default_factory=new_identifier)
    aviary_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate caretaker after initialization."""
        validate_identifier("id", self.id)
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        validate_count("age", self.age)
        validate_non_negative("salary", self.salary)
        validate_count("experience", self.experience)
        if len(set(self.aviary_ids)) != len(self.aviary_ids):
            raise ValueError("aviary_ids must not contain duplicates")

    def cares_for(self, aviary_id: str) -> bool:
        """Check whether the caretaker is assigned to an aviary."""
        return aviary_id in self.aviary_ids
