"""Utilities shared by the storage plugins."""

from .serialization import (
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

__all__ = [
    "animal_to_record",
    "aviary_to_record",
    "caretaker_to_record",
    "load_records",
    "path_to_record",
    "record_to_animal",
    "record_to_aviary",
    "record_to_caretaker",
    "record_to_path",
    "require_valid",
]
