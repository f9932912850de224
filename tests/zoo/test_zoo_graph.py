"""Tests for the ZooGraph orchestration layer."""

import logging

import pytest

from zoograph.core.enums import AnimalCategory, PathStatus
from zoograph.core.exceptions import EdgeNotFoundError, NodeNotFoundError, StorageError
from zoograph.core.models import Animal, Aviary, Caretaker, Path
from zoograph.infrastructure.storage.plugins.memory import MemoryAviaryRepository
from zoograph.zoo import ZooGraph


class FailingAviaryRepository(MemoryAviaryRepository):
    """Aviary repository whose writes always fail."""

    def insert(self, item):
        raise StorageError("disk full")


class UnreadableAviaryRepository(MemoryAviaryRepository):
    """Aviary repository that cannot be read."""

    def load_all(self):
        raise StorageError("corrupt database")


def reload(repositories) -> ZooGraph:
    """Build a second zoo over the same repositories."""
    return ZooGraph(*repositories)


def test_two_aviaries_become_connected(zoo, make_aviary):
    """Test connecting two aviaries with a path."""
    zoo.add_aviary(make_aviary("a1"))
    zoo.add_aviary(make_aviary("a2"))
    assert not zoo.is_fully_connected()

    assert zoo.add_path("a1", "a2", 15.0)

    assert zoo.is_fully_connected()
    assert zoo.distance_between("a1", "a2") == 15.0


def test_empty_zoo_is_connected(zoo):
    """Test that a zoo without aviaries counts as connected."""
    assert zoo.is_fully_connected()
    assert zoo.aviaries() == []
    assert zoo.paths() == []


def test_add_aviary_rejects_duplicates(zoo, make_aviary):
    """Test that an aviary id can only be used once."""
    assert zoo.add_aviary(make_aviary("a1"))
    assert not zoo.add_aviary(make_aviary("a1", name="Other"))
    assert zoo.aviary_name("a1") == "A1"
    assert zoo.aviary_count == 1


def test_add_aviary_must_be_empty(zoo, make_aviary):
    """Test that occupants cannot bypass admission."""
    assert not zoo.add_aviary(make_aviary("a1", occupant_ids=["leo"]))
    assert not zoo.add_aviary(make_aviary("a2", caretaker_id="ann"))
    assert zoo.aviary_count == 0


def test_queries(small_zoo):
    """Test the read-only query surface."""
    assert [a.id for a in small_zoo.aviaries()] == ["a", "b", "c", "d"]
    assert small_zoo.get_aviary("b").name == "B"
    assert small_zoo.get_aviary("zzz") is None
    assert small_zoo.aviary_name("zzz") is None
    assert small_zoo.neighbors("a") == ["b", "c"]
    assert small_zoo.neighbor_names("a") == ["B", "C"]
    assert small_zoo.hop_path("a", "c") == ["a", "c"]
    assert small_zoo.shortest_path("a", "c") == ["a", "b", "c"]
    assert small_zoo.distance_between("a", "c") == 10.0
    assert small_zoo.distance_between("a", "d") is None
    assert small_zoo.components() == [{"a", "b", "c"}, {"d"}]
    assert not small_zoo.is_fully_connected()
    assert small_zoo.path_count == 3


def test_require_aviary(small_zoo):
    """Test the raising lookup."""
    assert small_zoo.require_aviary("a").id == "a"
    with pytest.raises(NodeNotFoundError):
        small_zoo.require_aviary("zzz")


def test_find_aviary_by_name(small_zoo):
    """Test looking an aviary up by id or name."""
    assert small_zoo.find_aviary("C").id == "c"
    assert small_zoo.find_aviary("c").id == "c"
    assert small_zoo.find_aviary("nope") is None


def test_route(small_zoo):
    """Test route results for each outcome."""
    result = small_zoo.route("a", "c")
    assert result.status is PathStatus.FOUND
    assert result.total_weight == 10.0

    assert small_zoo.route("a", "d").status is PathStatus.NO_PATH
    assert small_zoo.route("a", "zzz").status is PathStatus.NODE_NOT_FOUND


def test_add_path_validation(small_zoo):
    """Test that invalid paths are refused."""
    assert not small_zoo.add_path("a", "zzz", 3.0)
    assert not small_zoo.add_path("a", "a", 3.0)
    assert not small_zoo.add_path("a", "d", 0.0)
    assert not small_zoo.add_path("a", "d", -2.0)
    assert not small_zoo.add_path("b", "a", 1.0)
    assert small_zoo.get_path("a", "b").length == 5.0


def test_path_mutations_are_persisted(small_zoo, repositories):
    """Test that path changes reach the repository."""
    assert small_zoo.update_path_length("c", "a", 8.0)
    assert small_zoo.remove_path("b", "a")
    assert not small_zoo.remove_path("b", "a")
    assert not small_zoo.update_path_length("a", "d", 1.0)
    assert not small_zoo.update_path_length("a", "c", 0.0)

    stored = {(p.from_id, p.to_id): p.length for p in repositories[1].load_all()}
    assert stored == {("a", "c"): 8.0, ("b", "c"): 5.0}


def test_paths_are_listed_once(small_zoo):
    """Test that each path appears once."""
    assert sorted((p.from_id, p.to_id, p.length) for p in small_zoo.paths()) == [
        ("a", "b", 5.0),
        ("a", "c", 20.0),
        ("b", "c", 5.0),
    ]


def test_reload_restores_state(small_zoo, repositories, make_animal):
    """Test that a zoo rebuilt from its repositories matches the original."""
    lion = make_animal("Leo", "Lion")
    small_zoo.animals.add_animal(lion)
    small_zoo.admit("a", "leo")
    small_zoo.caretakers.add(Caretaker(id="ann", name="Ann"))
    small_zoo.caretakers.assign("ann", "b")

    again = reload(repositories)

    assert [a.id for a in again.aviaries()] == ["a", "b", "c", "d"]
    assert again.distance_between("a", "c") == 10.0
    assert again.get_aviary("a").occupant_ids == ["leo"]
    assert again.animals.locate("leo") == "a"
    assert again.get_aviary("b").caretaker_id == "ann"
    assert again.caretakers.get("ann").aviary_ids == ["b"]


def test_reload_drops_dangling_paths(repositories, caplog):
    """Test that paths to unknown aviaries are dropped on load."""
    aviaries, paths, _, _ = repositories
    aviaries.insert(Aviary(id="a1", name="A1", category="Open", area=1.0, capacity=1))
    aviaries.insert(Aviary(id="a2", name="A2", category="Open", area=1.0, capacity=1))
    paths.insert(Path("a1", "a2", 4.0))
    paths.insert(Path("a1", "ghost", 4.0))

    with caplog.at_level(logging.WARNING):
        zoo = reload(repositories)

    assert zoo.path_count == 1
    assert zoo.distance_between("a1", "a2") == 4.0
    assert "ghost" in caplog.text


def test_reload_orphans_animals(repositories):
    """Test that animals whose aviary is unknown or refuses them are left unplaced."""
    aviaries, _, animals, _ = repositories
    aviaries.insert(Aviary(id="cage", name="Cage", category="Open", area=1.0, capacity=1))
    animals.insert(Animal(id="leo", name="Leo", species="Lion", category=AnimalCategory.MAMMAL, aviary_id="cage"))
    animals.insert(Animal(id="zed", name="Zed", species="Zebra", category=AnimalCategory.MAMMAL, aviary_id="cage"))
    animals.insert(Animal(id="bob", name="Bob", species="Bear", category=AnimalCategory.MAMMAL, aviary_id="gone"))

    zoo = reload(repositories)

    assert zoo.get_aviary("cage").occupant_ids == ["leo"]
    assert {a.id for a in zoo.animals.unplaced()} == {"zed", "bob"}
    stored = {a.id: a.aviary_id for a in animals.load_all()}
    assert stored == {"leo": "cage", "zed": None, "bob": None}


def test_reload_drops_unknown_caretaker_links(repositories):
    """Test that caretaker links to unknown aviaries are dropped on load."""
    aviaries, _, _, caretakers = repositories
    aviaries.insert(Aviary(id="a1", name="A1", category="Open", area=1.0, capacity=1))
    caretakers.insert(Caretaker(id="ann", name="Ann", aviary_ids=["a1", "gone"]))

    zoo = reload(repositories)

    assert zoo.caretakers.get("ann").aviary_ids == ["a1"]
    assert zoo.get_aviary("a1").caretaker_id == "ann"
    assert caretakers.load_all()[0].aviary_ids == ["a1"]
    assert aviaries.load_all()[0].caretaker_id == "ann"


def test_persistence_failure_keeps_memory(make_aviary, repositories, caplog):
    """Test that a failed write is logged and the aviary stays in memory."""
    _, paths, animals, caretakers = repositories
    zoo = ZooGraph(FailingAviaryRepository(), paths, animals, caretakers)

    with caplog.at_level(logging.ERROR):
        assert zoo.add_aviary(make_aviary("a1"))

    assert zoo.get_aviary("a1") is not None
    assert "disk full" in caplog.text


def test_unreadable_repository_is_treated_as_empty(repositories, caplog):
    """Test that a failed load still yields a usable zoo."""
    _, paths, animals, caretakers = repositories

    with caplog.at_level(logging.ERROR):
        zoo = ZooGraph(UnreadableAviaryRepository(), paths, animals, caretakers)

    assert zoo.aviary_count == 0
    assert "corrupt database" in caplog.text


def test_remove_aviary(small_zoo, repositories, make_animal):
    """Test that removing an aviary orphans animals, frees the caretaker and drops paths."""
    small_zoo.animals.add_animal(make_animal("Leo", "Lion"))
    small_zoo.admit("b", "leo")
    small_zoo.caretakers.add(Caretaker(id="ann", name="Ann"))
    small_zoo.caretakers.assign("ann", "b")

    assert small_zoo.remove_aviary("b")

    assert small_zoo.get_aviary("b") is None
    assert small_zoo.animals.locate("leo") is None
    assert small_zoo.caretakers.get("ann").aviary_ids == []
    assert small_zoo.neighbors("a") == ["c"]
    assert small_zoo.distance_between("a", "c") == 20.0
    assert not small_zoo.remove_aviary("b")

    again = reload(repositories)
    assert [a.id for a in again.aviaries()] == ["a", "c", "d"]
    assert again.path_count == 1
    assert again.animals.locate("leo") is None
    assert again.caretakers.get("ann").aviary_ids == []


def test_move_and_rollback(small_zoo, make_animal):
    """Test that a refused move leaves the animal where it was."""
    zoo = small_zoo
    for animal in (
        make_animal("Leo", "Lion"),
        make_animal("Zed", "Zebra"),
        make_animal("Gnu", "Gnu"),
        make_animal("Tig", "Tiger"),
    ):
        zoo.animals.add_animal(animal)
    zoo.admit("a", "zed")
    zoo.admit("a", "leo")
    zoo.admit("a", "gnu")
    zoo.admit("b", "tig")

    assert not zoo.move("a", "b", "leo")
    assert zoo.get_aviary("a").occupant_ids == ["zed", "leo", "gnu"]
    assert zoo.animals.locate("leo") == "a"

    assert zoo.move("a", "c", "leo")
    assert zoo.get_aviary("a").occupant_ids == ["zed", "gnu"]
    assert zoo.get_aviary("c").occupant_ids == ["leo"]
    assert zoo.animals.locate("leo") == "c"


def test_evict(small_zoo, make_animal):
    """Test taking an animal out of its aviary."""
    small_zoo.animals.add_animal(make_animal("Leo", "Lion"))
    small_zoo.admit("a", "leo")

    assert small_zoo.evict("a", "leo")
    assert not small_zoo.evict("a", "leo")
    assert small_zoo.animals.locate("leo") is None


def test_require_path(small_zoo):
    """Test the raising path lookup."""
    assert small_zoo.require_path("b", "a").length == 5.0
    with pytest.raises(EdgeNotFoundError) as exc_info:
        small_zoo.require_path("a", "d")
    assert "'a' and 'd'" in str(exc_info.value)


def test_invalid_record_is_not_stored(zoo, repositories, make_aviary, caplog):
    """Test that an aviary changed into an invalid state stays in memory but is not stored."""
    aviary = make_aviary("a1")
    aviary.area = -10.0

    with caplog.at_level(logging.ERROR):
        assert zoo.add_aviary(aviary)

    assert zoo.get_aviary("a1") is aviary
    assert repositories[0].load_all() == []
    assert "Validation Error: aviary record rejected" in caplog.text
