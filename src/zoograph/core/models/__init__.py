"""
Core domain models for the zoo graph system.

This package provides the data models used throughout the system:
- Node and Aviary: graph vertices
- Edge and Path: directed engine entries and logical aviary connections
- Animal: resources placed into aviaries
- Caretaker: staff assigned to aviaries
"""

from .animal import Animal
from .base import new_identifier
from .caretaker import Caretaker
from .edge import Edge, Path, path_key
from .node import Aviary, Node

__all__ = [
    "Animal",
    "Aviary",
    "Caretaker",
    "Edge",
    "Node",
    "Path",
    "new_identifier",
    "path_key",
]
