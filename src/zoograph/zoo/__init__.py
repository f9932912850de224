"""Zoo domain layer: the aviary graph and its animal and caretaker managers."""

from .animals import AnimalManager
from .caretakers import CaretakerManager
from .graph import ZooGraph

__all__ = ["AnimalManager", "CaretakerManager", "ZooGraph"]
