"""SQLite implementations of the repository ports."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .....core.models import Animal, Aviary, Caretaker, Path, path_key
from .....repositories.base import (
    AnimalRepository,
    AviaryRepository,
    CaretakerRepository,
    PathRepository,
)
from .....utils.validation import RecordKind
from ..utils import (
    animal_to_record,
    aviary_to_record,
    caretaker_to_record,
    load_records,
    path_to_record,
    record_to_animal,
    record_to_aviary,
    record_to_caretaker,
    record_to_path,
    require_valid,
)
from .constants import (
    ALL_SCHEMAS,
    ANIMAL_SCHEMA,
    AVIARY_SCHEMA,
    CARETAKER_SCHEMA,
    DELETE_ANIMAL,
    DELETE_AVIARY,
    DELETE_CARETAKER,
    DELETE_PATH,
    INSERT_ANIMAL,
    INSERT_AVIARY,
    INSERT_CARETAKER,
    INSERT_PATH,
    PATH_SCHEMA,
    SELECT_ANIMALS,
    SELECT_AVIARIES,
    SELECT_CARETAKERS,
    SELECT_PATHS,
    STORAGEDB,
    UPDATE_ANIMAL,
    UPDATE_ANIMAL_AVIARY,
    UPDATE_AVIARY_CARETAKER,
    UPDATE_CARETAKER_AVIARIES,
    UPDATE_PATH_LENGTH,
)
from .utils import SqliteDatabase, backup_database, initialize_table

logger = logging.getLogger(__name__)


class SqliteAviaryRepository(AviaryRepository):
    """
    SQLite implementation of the aviary repository.

    Attributes:
        db (SqliteDatabase): Database the aviaries table lives in
    """

    def __init__(self, db: SqliteDatabase):
        self.db = db

    def initialize(self) -> None:
        initialize_table(self.db.db_path, AVIARY_SCHEMA)

    def load_all(self) -> List[Aviary]:
        return load_records(RecordKind.AVIARY, self.db.fetch_all(SELECT_AVIARIES), record_to_aviary)

    def insert(self, item: Aviary) -> None:
        require_valid(RecordKind.AVIARY, aviary_to_record(item))
        self.db.execute(
            INSERT_AVIARY,
            (item.id, item.name, item.category, item.area, item.capacity, item.caretaker_id),
        )

    def delete(self, key: str) -> None:
        self.db.execute(DELETE_AVIARY, (key,))

    def update_link(self, aviary_id: str, caretaker_id: Optional[str]) -> None:
        self.db.execute(UPDATE_AVIARY_CARETAKER, (caretaker_id, aviary_id))


class SqlitePathRepository(PathRepository):
    """
    SQLite implementation of the path repository.

    Rows are keyed by the endpoint pair in ascending order, so a path can be
    deleted or updated with its endpoints given either way round.
    """

    def __init__(self, db: SqliteDatabase):
        self.db = db

    def initialize(self) -> None:
        initialize_table(self.db.db_path, PATH_SCHEMA)

    def load_all(self) -> List[Path]:
        return load_records(RecordKind.PATH, self.db.fetch_all(SELECT_PATHS), record_to_path)

    def insert(self, item: Path) -> None:
        require_valid(RecordKind.PATH, path_to_record(item))
        first, second = item.key
        self.db.execute(INSERT_PATH, (first, second, item.length))

    def delete(self, key: Tuple[str, str]) -> None:
        self.db.execute(DELETE_PATH, path_key(*key))

    def update_link(self, from_id: str, to_id: str, length: float) -> None:
        self.db.execute(UPDATE_PATH_LENGTH, (length, *path_key(from_id, to_id)))


def _animal_row(animal: Animal) -> Tuple[Any, ...]:
    return (
        animal.name,
        animal.species,
        animal.category.value,
        animal.age,
        animal.weight,
        animal.aviary_id,
        int(animal.is_fed),
    )


def _row_to_animal_record(row: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(row)
    if isinstance(record.get("is_fed"), int):
        record["is_fed"] = bool(record["is_fed"])
    return record


class SqliteAnimalRepository(AnimalRepository):
    """SQLite implementation of the animal repository."""

    def __init__(self, db: SqliteDatabase):
        self.db = db

    def initialize(self) -> None:
        initialize_table(self.db.db_path, ANIMAL_SCHEMA)

    def load_all(self) -> List[Animal]:
        records = [_row_to_animal_record(row) for row in self.db.fetch_all(SELECT_ANIMALS)]
        return load_records(RecordKind.ANIMAL, records, record_to_animal)

    def insert(self, item: Animal) -> None:
        require_valid(RecordKind.ANIMAL, animal_to_record(item))
        self.db.execute(INSERT_ANIMAL, (item.id, *_animal_row(item)))

    def delete(self, key: str) -> None:
        self.db.execute(DELETE_ANIMAL, (key,))

    def update_link(self, animal_id: str, aviary_id: Optional[str]) -> None:
        self.db.execute(UPDATE_ANIMAL_AVIARY, (aviary_id, animal_id))

    def update(self, animal: Animal) -> None:
        require_valid(RecordKind.ANIMAL, animal_to_record(animal))
        self.db.execute(UPDATE_ANIMAL, (*_animal_row(animal), animal.id))


def _row_to_caretaker_record(row: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(row)
    try:
        record["aviary_ids"] = json.loads(record["aviary_ids"])
    except (TypeError, ValueError):
        # Left as stored so schema validation reports the row.
        logger.debug("Caretaker %s has unreadable aviary ids", record.get("id"))
    return record


class SqliteCaretakerRepository(CaretakerRepository):
    """SQLite implementation of the caretaker repository. Aviary ids are stored as JSON."""

    def __init__(self, db: SqliteDatabase):
        self.db = db

    def initialize(self) -> None:
        initialize_table(self.db.db_path, CARETAKER_SCHEMA)

    def load_all(self) -> List[Caretaker]:
        records = [_row_to_caretaker_record(row) for row in self.db.fetch_all(SELECT_CARETAKERS)]
        return load_records(RecordKind.CARETAKER, records, record_to_caretaker)

    def insert(self, item: Caretaker) -> None:
        require_valid(RecordKind.CARETAKER, caretaker_to_record(item))
        self.db.execute(
            INSERT_CARETAKER,
            (
                item.id,
                item.name,
                item.age,
                item.salary,
                item.experience,
                json.dumps(list(item.aviary_ids)),
            ),
        )

    def delete(self, key: str) -> None:
        self.db.execute(DELETE_CARETAKER, (key,))

    def update_link(self, caretaker_id: str, aviary_ids: Sequence[str]) -> None:
        self.db.execute(UPDATE_CARETAKER_AVIARIES, (json.dumps(list(aviary_ids)), caretaker_id))


@dataclass
class SqliteRepositories:
    """
    The four SQLite repositories sharing one database file.

    Example:
        >>> repos = SqliteRepositories.open("zoo.db")
        >>> zoo = ZooGraph(*repos.as_tuple())
    """

    db: SqliteDatabase
    aviaries: SqliteAviaryRepository
    paths: SqlitePathRepository
    animals: SqliteAnimalRepository
    caretakers: SqliteCaretakerRepository

    @classmethod
    def open(cls, db_path: str) -> "SqliteRepositories":
        """
        Open a database file and create any missing tables.

        Raises:
            StorageError: If the database cannot be initialized
        """
        db = SqliteDatabase(db_path)
        for schema in ALL_SCHEMAS:
            initialize_table(db_path, schema)
        logger.info("Initialized SQLite storage at %s", db_path)
        return cls(
            db=db,
            aviaries=SqliteAviaryRepository(db),
            paths=SqlitePathRepository(db),
            animals=SqliteAnimalRepository(db),
            caretakers=SqliteCaretakerRepository(db),
        )

    def as_tuple(
        self,
    ) -> Tuple[
        SqliteAviaryRepository,
        SqlitePathRepository,
        SqliteAnimalRepository,
        SqliteCaretakerRepository,
    ]:
        """Repositories in ZooGraph constructor order."""
        return self.aviaries, self.paths, self.animals, self.caretakers

    def backup(self, backup_dir: str) -> str:
        """
        Create a backup of the database.

        Raises:
            StorageError: If backup fails
        """
        return backup_database(self.db.db_path, backup_dir, STORAGEDB)
