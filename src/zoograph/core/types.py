"""
Core type definitions and protocols.

This module provides the protocols used across the core so that analysis
helpers and the admission controller depend on behaviour, not on concrete
classes.
"""

from typing import Iterable, List, Optional, Protocol

from .models import Animal


class GraphView(Protocol):
    """Protocol defining the read-only graph operations used by analysis helpers."""

    def nodes(self) -> Iterable[str]:
        """Node ids in insertion order."""
        ...

    def neighbors(self, node_id: str) -> List[str]:
        """Adjacent node ids."""
        ...

    def has_node(self, node_id: str) -> bool:
        """Check if a node exists."""
        ...


class AnimalDirectory(Protocol):
    """Protocol for resolving animal ids held by aviaries."""

    def get(self, animal_id: str) -> Optional[Animal]:
        """Get an animal by id, or None if unknown."""
        ...
