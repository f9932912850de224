"""
Serialization utilities for storage plugins.

This module converts models to plain records (dictionaries of JSON-compatible
values) and back. Records read from a store pass through load_records(), which
validates each one against its JSON schema and skips the ones that fail.

Aviary records do not carry their occupants; an animal's location is stored
only on the animal record.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from .....core.enums import AnimalCategory
from .....core.exceptions import ValidationError
from .....core.models import Animal, Aviary, Caretaker, Path
from .....utils.validation import RecordKind, SchemaValidator, default_validator

logger = logging.getLogger(__name__)

T = TypeVar("T")
Record = Dict[str, Any]

_validator = default_validator()


def aviary_to_record(aviary: Aviary) -> Record:
    return {
        "id": aviary.id,
        "name": aviary.name,
        "category": aviary.category,
        "area": aviary.area,
        "capacity": aviary.capacity,
        "caretaker_id": aviary.caretaker_id,
    }


def record_to_aviary(record: Record) -> Aviary:
    return Aviary(
        id=record["id"],
        name=record["name"],
        category=record["category"],
        area=float(record["area"]),
        capacity=int(record["capacity"]),
        caretaker_id=record.get("caretaker_id"),
    )


def path_to_record(path: Path) -> Record:
    return {"from_id": path.from_id, "to_id": path.to_id, "length": path.length}


def record_to_path(record: Record) -> Path:
    return Path(record["from_id"], record["to_id"], float(record["length"]))


def animal_to_record(animal: Animal) -> Record:
    return {
        "id": animal.id,
        "name": animal.name,
        "species": animal.species,
        "category": animal.category.value,
        "age": animal.age,
        "weight": animal.weight,
        "aviary_id": animal.aviary_id,
        "is_fed": animal.is_fed,
    }


def record_to_animal(record: Record) -> Animal:
    return Animal(
        id=record["id"],
        name=record["name"],
        species=record["species"],
        category=AnimalCategory(record["category"]),
        age=int(record["age"]),
        weight=float(record["weight"]),
        aviary_id=record.get("aviary_id"),
        is_fed=bool(record.get("is_fed", False)),
    )


def caretaker_to_record(caretaker: Caretaker) -> Record:
    return {
        "id": caretaker.id,
        "name": caretaker.name,
        "age": caretaker.age,
        "salary": caretaker.salary,
        "experience": caretaker.experience,
        "aviary_ids": list(caretaker.aviary_ids),
    }


def record_to_caretaker(record: Record) -> Caretaker:
    return Caretaker(
        id=record["id"],
        name=record["name"],
        age=int(record["age"]),
        salary=float(record["salary"]),
        experience=int(record["experience"]),
        aviary_ids=list(record.get("aviary_ids") or []),
    )


def require_valid(kind: RecordKind, record: Record, validator: Optional[SchemaValidator] = None) -> Record:
    """
    Check a record against its schema before it is written.

    Models validate on construction only, so a field changed afterwards is
    caught here.

    Returns:
        The record, unchanged

    Raises:
        ValidationError: If the record does not match its schema
    """
    result = (validator or _validator).validate(kind, record)
    if not result.is_valid:
        raise ValidationError(f"{kind.value} record rejected: {result.summary()}")
    return record


def load_records(
    kind: RecordKind,
    records: Iterable[Record],
    converter: Callable[[Record], T],
    validator: Optional[SchemaValidator] = None,
) -> List[T]:
    """
    Validate and convert stored records into models.

    Records that fail schema validation or model construction are skipped
    with a warning; the rest are returned in their original order.

    Args:
        kind: Kind of the records
        records: Records read from the store
        converter: Record to model conversion function
        validator: Schema validator, the default record validator when omitted

    Returns:
        List of models built from the valid records
    """
    validator = validator or _validator
    models: List[T] = []

    for record in records:
        result = validator.validate(kind, record)
        if not result.is_valid:
            logger.warning("Skipping invalid %s record: %s", kind.value, result.summary())
            continue
        try:
            models.append(converter(record))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping invalid %s record: %s", kind.value, str(e))

    return models
