"""Repository ports for the zoo graph."""

from .base import (
    AnimalRepository,
    AviaryRepository,
    BaseRepository,
    CaretakerRepository,
    PathRepository,
)

__all__ = [
    "AnimalRepository",
    "AviaryRepository",
    "BaseRepository",
    "CaretakerRepository",
    "PathRepository",
]
