"""In-memory storage plugin."""

from .repositories import (
    MemoryAnimalRepository,
    MemoryAviaryRepository,
    MemoryCaretakerRepository,
    MemoryPathRepository,
)

__all__ = [
    "MemoryAnimalRepository",
    "MemoryAviaryRepository",
    "MemoryCaretakerRepository",
    "MemoryPathRepository",
]
