"""Shared test fixtures."""

from typing import Callable

import pytest

from zoograph.core.enums import AnimalCategory
from zoograph.core.models import Animal, Aviary
from zoograph.infrastructure.storage.plugins.memory import (
    MemoryAnimalRepository,
    MemoryAviaryRepository,
    MemoryCaretakerRepository,
    MemoryPathRepository,
)
from zoograph.zoo import ZooGraph


@pytest.fixture
def make_animal() -> Callable[..., Animal]:
    """Fixture providing a factory for animals with readable ids."""

    def factory(
        name: str,
        species: str,
        category: AnimalCategory = AnimalCategory.MAMMAL,
        **kwargs,
    ) -> Animal:
        kwargs.setdefault("id", name.lower())
        return Animal(name=name, species=species, category=category, **kwargs)

    return factory


@pytest.fixture
def make_aviary() -> Callable[..., Aviary]:
    """Fixture providing a factory for aviaries with readable ids."""

    def factory(aviary_id: str, capacity: int = 3, **kwargs) -> Aviary:
        kwargs.setdefault("name", aviary_id.upper())
        kwargs.setdefault("category", "Open")
        kwargs.setdefault("area", 100.0)
        return Aviary(id=aviary_id, capacity=capacity, **kwargs)

    return factory


@pytest.fixture
def repositories():
    """Fixture providing a fresh set of in-memory repositories."""
    return (
        MemoryAviaryRepository(),
        MemoryPathRepository(),
        MemoryAnimalRepository(),
        MemoryCaretakerRepository(),
    )


@pytest.fixture
def zoo(repositories) -> ZooGraph:
    """Fixture providing an empty zoo backed by in-memory repositories."""
    return ZooGraph(*repositories)


@pytest.fixture
def small_zoo(zoo, make_aviary) -> ZooGraph:
    """
    Fixture providing a zoo with four aviaries.

    Layout (lengths in metres):

        a --5-- b --5-- c
        |               |
        +------20-------+      d is isolated
    """
    for aviary_id in ("a", "b", "c", "d"):
        assert zoo.add_aviary(make_aviary(aviary_id))
    assert zoo.add_path("a", "b", 5.0)
    assert zoo.add_path("b", "c", 5.0)
    assert zoo.add_path("a", "c", 20.0)
    return zoo
