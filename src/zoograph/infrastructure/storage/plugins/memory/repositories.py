"""In-memory implementations of the repository ports.

Items are kept as serialized records rather than live models, so a loaded
model never aliases the stored state and load_all() goes through the same
validation as every other adapter.
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .....core.exceptions import DuplicateResourceError
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

logger = logging.getLogger(__name__)


class _RecordStore:
    """Ordered record storage shared by the memory repositories."""

    def __init__(self, kind: RecordKind):
        self.kind = kind
        self.records: Dict = {}

    def insert(self, key, record: dict) -> None:
        if key in self.records:
            raise DuplicateResourceError(f"{self.kind.value} already exists: {key}")
        self.records[key] = record

    def delete(self, key) -> None:
        self.records.pop(key, None)

    def snapshot(self) -> List[dict]:
        return [copy.deepcopy(record) for record in self.records.values()]


class MemoryAviaryRepository(AviaryRepository):
    """Dict-backed aviary repository."""

    def __init__(self):
        self.store = _RecordStore(RecordKind.AVIARY)

    def load_all(self) -> List[Aviary]:
        return load_records(RecordKind.AVIARY, self.store.snapshot(), record_to_aviary)

    def insert(self, item: Aviary) -> None:
        self.store.insert(item.id, require_valid(RecordKind.AVIARY, aviary_to_record(item)))

    def delete(self, key: str) -> None:
        self.store.delete(key)

    def update_link(self, aviary_id: str, caretaker_id: Optional[str]) -> None:
        if aviary_id in self.store.records:
            self.store.records[aviary_id]["caretaker_id"] = caretaker_id


class MemoryPathRepository(PathRepository):
    """Dict-backed path repository keyed by the normalised endpoint pair."""

    def __init__(self):
        self.store = _RecordStore(RecordKind.PATH)

    def load_all(self) -> List[Path]:
        return load_records(RecordKind.PATH, self.store.snapshot(), record_to_path)

    def insert(self, item: Path) -> None:
        self.store.insert(item.key, require_valid(RecordKind.PATH, path_to_record(item)))

    def delete(self, key: Tuple[str, str]) -> None:
        self.store.delete(path_key(*key))

    def update_link(self, from_id: str, to_id: str, length: float) -> None:
        record = self.store.records.get(path_key(from_id, to_id))
        if record is not None:
            record["length"] = length


class MemoryAnimalRepository(AnimalRepository):
    """Dict-backed animal repository."""

    def __init__(self):
        self.store = _RecordStore(RecordKind.ANIMAL)

    def load_all(self) -> List[Animal]:
        return load_records(RecordKind.ANIMAL, self.store.snapshot(), record_to_animal)

    def insert(self, item: Animal) -> None:
        self.store.insert(item.id, require_valid(RecordKind.ANIMAL, animal_to_record(item)))

    def delete(self, key: str) -> None:
        self.store.delete(key)

    def update_link(self, animal_id: str, aviary_id: Optional[str]) -> None:
        if animal_id in self.store.records:
            self.store.records[animal_id]["aviary_id"] = aviary_id

    def update(self, animal: Animal) -> None:
        if animal.id in self.store.records:
            self.store.records[animal.id] = require_valid(RecordKind.ANIMAL, animal_to_record(animal))


class MemoryCaretakerRepository(CaretakerRepository):
    """Dict-backed caretaker repository."""

    def __init__(self):
        self.store = _RecordStore(RecordKind.CARETAKER)

    def load_all(self) -> List[Caretaker]:
        return load_records(RecordKind.CARETAKER, self.store.snapshot(), record_to_caretaker)

    def insert(self, item: Caretaker) -> None:
        self.store.insert(item.id, require_valid(RecordKind.CARETAKER, caretaker_to_record(item)))

    def delete(self, key: str) -> None:
        self.store.delete(key)

    def update_link(self, caretaker_id: str, aviary_ids: Sequence[str]) -> None:
        if caretaker_id in self.store.records:
            self.store.records[caretaker_id]["aviary_ids"] = list(aviary_ids)
