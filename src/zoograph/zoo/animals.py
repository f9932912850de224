"""
Animal arena and placement.

The AnimalManager owns every Animal in the zoo, keyed by id. Aviaries only
hold animal ids, and all placement changes go through the manager's
AdmissionController so the aviary occupant list and the animal's aviary_id
never disagree.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..core.admission import AdmissionController
from ..core.compatibility import DEFAULT_RULES, CompatibilityRule
from ..core.enums import AdmissionDecision, AnimalCategory
from ..core.exceptions import InvariantViolationError
from ..core.models import Animal, Aviary
from ..repositories.base import AnimalRepository
from .base import PersistingComponent

AviaryLookup = Callable[[str], Optional[Aviary]]


class AnimalManager(PersistingComponent):
    """
    Registry of animals with admission-controlled placement.

    Attributes:
        repository (AnimalRepository): Write-through store for animals
        admission (AdmissionController): Gate for every placement
    """

    def __init__(
        self,
        repository: AnimalRepository,
        aviary_lookup: AviaryLookup,
        rules: Sequence[CompatibilityRule] = DEFAULT_RULES,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize an empty arena.

        Args:
            repository: Store that animal changes are written through to
            aviary_lookup: Resolves aviary ids to aviaries
            rules: Compatibility rule table used for admission
            logger: Logger to report through
        """
        super().__init__(logger)
        self.repository = repository
        self._aviary_lookup = aviary_lookup
        self._animals: Dict[str, Animal] = {}
        self.admission = AdmissionController(self, rules, logger=self._logger)

    def __len__(self) -> int:
        return len(self._animals)

    def __contains__(self, animal_id: object) -> bool:
        return animal_id in self._animals

    def all(self) -> List[Animal]:
        """All animals in registration order."""
        return list(self._animals.values())

    def get(self, animal_id: str) -> Optional[Animal]:
        return self._animals.get(animal_id)

    def create_animal(
        self,
        name: str,
        species: str,
        age: int,
        weight: float,
        category: Union[str, AnimalCategory],
    ) -> Optional[Animal]:
        """
        Create and register a new, unplaced animal.

        Args:
            name: Display name
            species: Species name
            age: Age in years
            weight: Weight in kilograms
            category: Category member or its name, matched case-insensitively

        Returns:
            The new animal, or None if the category is unknown or a field is invalid
        """
        resolved = AnimalCategory.parse(category)
        if resolved is None:
            self._logger.warning("Unknown animal category: %s", category)
            return None
        try:
            animal = Animal(name=name, species=species, category=resolved, age=age, weight=weight)
        except (ValueError, TypeError) as e:
            self._logger.warning("Cannot create animal %s: %s", name, str(e))
            return None

        self.add_animal(animal)
        return animal

    def _register(self, animal: Animal) -> bool:
        """
        Put an animal into the arena and place it where its aviary_id points.

        An animal whose aviary is unknown or refuses admission stays in the
        arena unplaced.

        Returns:
            bool: False if the id is already registered
        """
        if animal.id in self._animals:
            self._logger.warning("Animal already registered: %s", animal.id)
            return False

        self._animals[animal.id] = animal
        target_id, animal.aviary_id = animal.aviary_id, None
        if target_id is None:
            return True

        aviary = self._aviary_lookup(target_id)
        if aviary is None:
            self._logger.warning(
                "Animal %s refers to unknown aviary %s; left unplaced", animal.name, target_id
            )
        elif not self.admission.admit(aviary, animal):
            self._logger.warning(
                "Animal %s could not be placed in aviary %s; left unplaced",
                animal.name,
                aviary.name,
            )
        return True

    def add_animal(self, animal: Animal) -> bool:
        """
        Register an animal and store it.

        If the animal already names an aviary it is admitted there, or left
        unplaced when admission fails.

        Returns:
            bool: False if an animal with the same id is already registered
        """
        if not self._register(animal):
            return False
        self._persist(f"animal {animal.id}", self.repository.insert, animal)
        self._logger.info("Added animal %s (%s)", animal.name, animal.species)
        return True

    def load(self, animals: Sequence[Animal]) -> None:
        """
        Register animals read from the repository.

        Animals that end up somewhere other than their stored aviary have their
        stored location corrected.
        """
        for animal in animals:
            stored_aviary_id = animal.aviary_id
            if self._register(animal) and animal.aviary_id != stored_aviary_id:
                self._persist(
                    f"location of animal {animal.id}",
                    self.repository.update_link,
                    animal.id,
                    animal.aviary_id,
                )
        self._logger.info("Loaded %d animals", len(self._animals))

    def remove_animal(self, animal_id: str) -> bool:
        """Evict an animal from its aviary, if any, and delete it."""
        animal = self._animals.get(animal_id)
        if animal is None:
            self._logger.warning("Animal not found: %s", animal_id)
            return False

        if animal.aviary_id is not None:
            aviary = self._aviary_lookup(animal.aviary_id)
            if aviary is not None:
                self.admission.evict(aviary, animal_id)
            animal.aviary_id = None
        del self._animals[animal_id]
        self._persist(f"removal of animal {animal_id}", self.repository.delete, animal_id)
        self._logger.info("Removed animal %s", animal.name)
        return True

    def _resolve(self, aviary_id: str, animal_id: str):
        aviary = self._aviary_lookup(aviary_id)
        if aviary is None:
            self._logger.warning("Aviary not found: %s", aviary_id)
        animal = self._animals.get(animal_id)
        if animal is None:
            self._logger.warning("Animal not found: %s", animal_id)
        return aviary, animal

    def _persist_location(self, animal: Animal) -> None:
        self._persist(
            f"location of animal {animal.id}",
            self.repository.update_link,
            animal.id,
            animal.aviary_id,
        )

    def check(self, aviary_id: str, animal_id: str) -> AdmissionDecision:
        """Report whether an animal could enter an aviary without changing anything."""
        aviary, animal = self._resolve(aviary_id, animal_id)
        if aviary is None:
            return AdmissionDecision.MISSING
        return self.admission.check(aviary, animal)

    def admit(self, aviary_id: str, animal_id: str) -> bool:
        """Place an animal into an aviary."""
        aviary, animal = self._resolve(aviary_id, animal_id)
        if aviary is None or animal is None:
            return False
        if not self.admission.admit(aviary, animal):
            return False
        self._persist_location(animal)
        return True

    def evict(self, aviary_id: str, animal_id: str) -> bool:
        """Take an animal out of an aviary, leaving it unplaced."""
        aviary, animal = self._resolve(aviary_id, animal_id)
        if aviary is None or animal is None:
            return False
        if not self.admission.evict(aviary, animal_id):
            return False
        self._persist_location(animal)
        return True

    def move(self, from_id: str, to_id: str, animal_id: str) -> bool:
        """
        Move an animal between aviaries.

        The animal is evicted from the source and admitted to the target. If
        the target refuses it, the animal is put back at its original position
        in the source and nothing is stored.

        Raises:
            InvariantViolationError: If the animal cannot be put back
        """
        source, animal = self._resolve(from_id, animal_id)
        target = self._aviary_lookup(to_id)
        if source is None or animal is None:
            return False
        if target is None:
            self._logger.warning("Aviary not found: %s", to_id)
            return False
        if from_id == to_id:
            self._logger.warning("Animal %s is already in aviary %s", animal.name, source.name)
            return False
        if not source.contains(animal_id):
            self._logger.warning("Animal %s is not in aviary %s", animal.name, source.name)
            return False

        index = source.occupant_ids.index(animal_id)
        self.admission.evict(source, animal_id)
        if not self.admission.admit(target, animal):
            if not self.admission.admit(source, animal, index=index):
                raise InvariantViolationError(
                    f"Animal '{animal_id}' could not be returned to aviary '{from_id}'"
                )
            self._logger.warning(
                "Move of %s from %s to %s rolled back", animal.name, source.name, target.name
            )
            return False

        self._persist_location(animal)
        self._logger.info("Moved %s from %s to %s", animal.name, source.name, target.name)
        return True

    def release_aviary(self, aviary: Aviary) -> List[str]:
        """
        Evict every occupant of an aviary.

        Returns:
            List[str]: Ids of the animals that were evicted
        """
        released = list(aviary.occupant_ids)
        for animal_id in released:
            self.admission.evict(aviary, animal_id)
            animal = self._animals.get(animal_id)
            if animal is not None:
                self._persist_location(animal)
        return released

    def unplaced(self) -> List[Animal]:
        """Animals that are not in any aviary."""
        return [animal for animal in self._animals.values() if animal.aviary_id is None]

    def all_placed(self) -> bool:
        """Whether every animal is in an aviary. True for an empty arena."""
        return all(animal.aviary_id is not None for animal in self._animals.values())

    def locate(self, animal_id: str) -> Optional[str]:
        """Id of the aviary holding an animal, or None."""
        animal = self._animals.get(animal_id)
        return animal.aviary_id if animal is not None else None

    def feed(self, animal_id: str) -> bool:
        """Feed an animal. Returns False if it is unknown or already fed."""
        animal = self._animals.get(animal_id)
        if animal is None:
            self._logger.warning("Animal not found: %s", animal_id)
            return False
        if not animal.feed():
            self._logger.warning("Animal %s has already been fed", animal.name)
            return False
        self._persist(f"feeding of animal {animal_id}", self.repository.update, animal)
        self._logger.info("Fed %s", animal.name)
        return True

    def reset_feeding(self) -> int:
        """
        Mark every animal as hungry again.

        Returns:
            int: Number of animals whose state changed
        """
        reset = 0
        for animal in self._animals.values():
            if animal.is_fed:
                animal.is_fed = False
                reset += 1
                self._persist(f"feeding of animal {animal.id}", self.repository.update, animal)
        self._logger.info("Reset feeding for %d animals", reset)
        return reset
