"""
Repository ports for the zoo graph.

This module defines the persistence interface the orchestration layer depends
on. Every repository exposes the same four operation shapes:
- load_all: read every stored item back as models
- insert: store a new item
- delete: remove an item by key
- update_link: change the one relationship the item owns

Adapters (in-memory, SQLite) implement these ports. Adapters report failures
by raising StorageError; a key that is not present is not an error.
"""

from abc import ABC, abstractmethod
from typing import Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

from ..core.models import Animal, Aviary, Caretaker, Path

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class BaseRepository(ABC, Generic[T, K]):
    """
    Abstract base repository shared by all ports.

    Subclasses fix the model type T and the key type K.
    """

    def initialize(self) -> None:
        """
        Prepare the backing store.

        Called once before first use. The default implementation does nothing.

        Raises:
            StorageError: If the store cannot be prepared
        """

    @abstractmethod
    def load_all(self) -> List[T]:
        """
        Load every stored item.

        Records that fail validation are skipped with a warning.

        Raises:
            StorageError: If the store cannot be read
        """

    @abstractmethod
    def insert(self, item: T) -> None:
        """
        Store a new item.

        Raises:
            StorageError: If there's an error during storage operation
            DuplicateResourceError: If the key is already stored
            ValidationError: If the item does not serialize to a valid record
        """

    @abstractmethod
    def delete(self, key: K) -> None:
        """
        Remove the item stored under key. Missing keys are ignored.

        Raises:
            StorageError: If there's an error during storage operation
        """


class AviaryRepository(BaseRepository[Aviary, str]):
    """Persistence port for aviaries. Occupants are stored on the animals."""

    @abstractmethod
    def update_link(self, aviary_id: str, caretaker_id: Optional[str]) -> None:
        """Set or clear the caretaker of an aviary."""


class PathRepository(BaseRepository[Path, Tuple[str, str]]):
    """Persistence port for paths, keyed by their endpoint pair in either order."""

    @abstractmethod
    def update_link(self, from_id: str, to_id: str, length: float) -> None:
        """Change the length of a stored path."""


class AnimalRepository(BaseRepository[Animal, str]):
    """Persistence port for animals."""

    @abstractmethod
    def update_link(self, animal_id: str, aviary_id: Optional[str]) -> None:
        """Set or clear the aviary an animal lives in."""

    def update(self, animal: Animal) -> None:
        """
        Replace the stored state of an animal.

        The default implementation deletes and re-inserts the animal.
        """
        self.delete(animal.id)
        self.insert(animal)


class CaretakerRepository(BaseRepository[Caretaker, str]):
    """Persistence port for caretakers."""

    @abstractmethod
    def update_link(self, caretaker_id: str, aviary_ids: Sequence[str]) -> None:
        """Replace the aviary ids a caretaker is responsible for."""
