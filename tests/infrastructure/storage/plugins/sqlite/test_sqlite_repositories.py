"""Tests for the SQLite repositories."""

import logging
import os

import pytest

from zoograph.core.enums import AnimalCategory
from zoograph.core.exceptions import DuplicateResourceError, StorageError, ValidationError
from zoograph.core.models import Animal, Aviary, Caretaker, Path
from zoograph.infrastructure.storage.plugins.sqlite import SqliteDatabase, SqliteRepositories
from zoograph.zoo import ZooGraph


@pytest.fixture
def db_path(tmp_path):
    """Fixture providing a database file path inside a temporary directory."""
    return str(tmp_path / "zoo.db")


@pytest.fixture
def repos(db_path):
    """Fixture providing freshly initialized SQLite repositories."""
    return SqliteRepositories.open(db_path)


def test_open_creates_tables(repos, db_path):
    """Test that opening a new file creates every table."""
    rows = SqliteDatabase(db_path).fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")

    assert {row["name"] for row in rows} == {"aviaries", "paths", "animals", "caretakers"}
    assert repos.aviaries.load_all() == []


def test_open_is_idempotent(db_path):
    """Test that reopening an existing database keeps its rows."""
    first = SqliteRepositories.open(db_path)
    first.aviaries.insert(Aviary(id="a1", name="A1", category="Open", area=10.0, capacity=2))

    second = SqliteRepositories.open(db_path)

    assert [a.id for a in second.aviaries.load_all()] == ["a1"]


def test_aviary_round_trip(repos):
    """Test storing, relinking and deleting aviaries."""
    repos.aviaries.insert(Aviary(id="a1", name="Savanna", category="Open", area=250.5, capacity=4))
    repos.aviaries.update_link("a1", "ann")

    (loaded,) = repos.aviaries.load_all()
    assert loaded.name == "Savanna"
    assert loaded.area == 250.5
    assert loaded.capacity == 4
    assert loaded.caretaker_id == "ann"
    assert loaded.occupant_ids == []

    repos.aviaries.delete("a1")
    assert repos.aviaries.load_all() == []


def test_path_keys_are_order_independent(repos):
    """Test that a path can be addressed with its endpoints either way round."""
    repos.paths.insert(Path("b", "a", 3.0))
    repos.paths.update_link("b", "a", 6.0)

    (loaded,) = repos.paths.load_all()
    assert (loaded.from_id, loaded.to_id, loaded.length) == ("a", "b", 6.0)

    with pytest.raises(DuplicateResourceError):
        repos.paths.insert(Path("a", "b", 1.0))

    repos.paths.delete(("b", "a"))
    assert repos.paths.load_all() == []


def test_animal_round_trip(repos):
    """Test that every animal field survives storage."""
    leo = Animal(
        id="leo",
        name="Leo",
        species="Lion",
        category=AnimalCategory.MAMMAL,
        age=7,
        weight=190.5,
    )
    repos.animals.insert(leo)
    repos.animals.update_link("leo", "a1")
    leo.aviary_id = "a1"
    leo.feed()
    repos.animals.update(leo)

    (loaded,) = repos.animals.load_all()
    assert loaded == leo
    assert loaded.is_fed is True


def test_caretaker_round_trip(repos):
    """Test that aviary links are stored in order."""
    repos.caretakers.insert(Caretaker(id="ann", name="Ann", age=40, salary=3100.0, experience=9))
    repos.caretakers.update_link("ann", ["b", "a"])

    (loaded,) = repos.caretakers.load_all()
    assert loaded.aviary_ids == ["b", "a"]
    assert loaded.salary == 3100.0


def test_duplicate_insert_is_reported(repos):
    """Test that inserting an existing id raises."""
    aviary = Aviary(id="a1", name="A1", category="Open", area=1.0, capacity=1)
    repos.aviaries.insert(aviary)

    with pytest.raises(DuplicateResourceError):
        repos.aviaries.insert(aviary)


def test_invalid_rows_are_skipped(repos, caplog):
    """Test that rows failing validation are left out of a load."""
    repos.db.execute(
        "INSERT INTO animals (id, name, species, category, age, weight) VALUES (?, ?, ?, ?, ?, ?)",
        ("bad", "Bad", "Lion", "Dragon", 1, 1.0),
    )
    repos.db.execute(
        "INSERT INTO caretakers (id, name, age, salary, experience, aviary_ids) VALUES (?, ?, ?, ?, ?, ?)",
        ("odd", "Odd", 30, 100.0, 2, "not json"),
    )
    repos.animals.insert(Animal(id="ok", name="Ok", species="Lion", category=AnimalCategory.MAMMAL))

    with caplog.at_level(logging.WARNING):
        animals = repos.animals.load_all()
        caretakers = repos.caretakers.load_all()

    assert [a.id for a in animals] == ["ok"]
    assert caretakers == []
    assert "Skipping invalid animal record" in caplog.text
    assert "Skipping invalid caretaker record" in caplog.text


def test_unreadable_database_raises_storage_error(tmp_path):
    """Test that a file that is not a database is reported as a storage error."""
    path = tmp_path / "garbage.db"
    path.write_bytes(b"definitely not sqlite" * 100)

    with pytest.raises(StorageError):
        SqliteRepositories.open(str(path))


def test_backup(repos, tmp_path):
    """Test that a backup holds the same rows."""
    repos.aviaries.insert(Aviary(id="a1", name="A1", category="Open", area=1.0, capacity=1))

    backup_path = repos.backup(str(tmp_path / "backups"))

    assert os.path.exists(backup_path)
    copy = SqliteRepositories.open(backup_path)
    assert [a.id for a in copy.aviaries.load_all()] == ["a1"]


def test_zoo_over_sqlite_survives_restart(db_path):
    """Test a full zoo persisted to SQLite and loaded again."""
    zoo = ZooGraph(*SqliteRepositories.open(db_path).as_tuple())
    zoo.add_aviary(Aviary(id="a1", name="Savanna", category="Open", area=300.0, capacity=3))
    zoo.add_aviary(Aviary(id="a2", name="Pond", category="Water", area=80.0, capacity=5))
    zoo.add_path("a2", "a1", 12.5)
    leo = zoo.animals.create_animal("Leo", "Lion", 4, 180.0, "Mammal")
    zoo.admit("a1", leo.id)
    zoo.caretakers.add(Caretaker(id="ann", name="Ann"))
    zoo.caretakers.assign("ann", "a2")

    again = ZooGraph(*SqliteRepositories.open(db_path).as_tuple())

    assert again.distance_between("a1", "a2") == 12.5
    assert again.get_aviary("a1").occupant_ids == [leo.id]
    assert again.caretakers.caretaker_of("a2").id == "ann"


def test_invalid_model_is_rejected_on_write(repos):
    """Test that invalid rows never reach the database."""
    aviary = Aviary(id="a1", name="A1", category="Open", area=1.0, capacity=1)
    aviary.capacity = -2

    with pytest.raises(ValidationError):
        repos.aviaries.insert(aviary)
    assert repos.db.fetch_all("SELECT id FROM aviaries") == []
