"""
Edge models for the zoo graph system.

This module defines the directed Edge entry stored by the graph engine and the
Path model, the logical undirected connection between two aviaries.
"""

from dataclasses import dataclass
from typing import Tuple

from .base import validate_identifier, validate_non_negative


@dataclass(frozen=True)
class Edge:
    """
    Directed edge entry in the graph engine.

    An undirected connection is stored as two Edge entries with equal weight,
    one in each direction.

    Attributes:
        from_entity (str): Source node ID
        to_entity (str): Target node ID
        weight (float): Non-negative traversal cost
    """

    from_entity: str
    to_entity: str
    weight: float = 1.0

    def __post_init__(self):
        """Validate edge after initialization."""
        validate_identifier("source node", self.from_entity)
        validate_identifier("target node", self.to_entity)
        validate_non_negative("weight", self.weight)

    def reversed(self) -> "Edge":
        """Return the opposite-direction entry with the same weight."""
        return Edge(self.to_entity, self.from_entity, self.weight)

    @property
    def key(self) -> Tuple[str, str]:
        """Unordered pair identifying the logical connection."""
        return path_key(self.from_entity, self.to_entity)


@dataclass
class Path:
    """
    Walkable path between two aviaries.

    Attributes:
        from_id (str): ID of one endpoint aviary
        to_id (str): ID of the other endpoint aviary
        length (float): Path length in metres, strictly positive
    """

    from_id: str
    to_id: str
    length: float

    def __post_init__(self):
        """Validate path after initialization."""
        validate_identifier("from_id", self.from_id)
        validate_identifier("to_id", self.to_id)
        validate_non_negative("length", self.length)
        if self.length == 0:
            raise ValueError("length must be positive")
        if self.from_id == self.to_id:
            raise ValueError("a path must connect two different aviaries")

    @property
    def key(self) -> Tuple[str, str]:
        """Unordered pair identifying the path."""
        return path_key(self.from_id, self.to_id)

    @classmethod
    def from_edge(cls, edge: Edge) -> "Path":
        """Build a path from a graph edge entry."""
        return cls(edge.from_entity, edge.to_entity, edge.weight)


def path_key(first: str, second: str) -> Tuple[str, str]:
    """Normalise an unordered node pair."""
    return (first, second) if first <= second else (second, first)
