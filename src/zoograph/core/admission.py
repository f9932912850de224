"""
Admission control for aviaries.

The AdmissionController decides whether an animal may enter an aviary and
performs the placement. A placement updates two places at once, the aviary's
occupant list and the animal's aviary_id, and the controller is the only code
that changes either of them.

Checks are applied in order and the first failing one decides the outcome:
1. MISSING: no candidate was given
2. DUPLICATE: the candidate already occupies this aviary
3. ALREADY_PLACED: the candidate occupies another aviary
4. FULL: the aviary is at capacity
5. INCOMPATIBLE: the candidate conflicts with an occupant in either direction
"""

import logging
from typing import Optional, Sequence

from .compatibility import DEFAULT_RULES, CompatibilityRule, find_conflict
from .enums import AdmissionDecision
from .exceptions import InvariantViolationError
from .models import Animal, Aviary
from .types import AnimalDirectory


class AdmissionController:
    """
    Capacity and compatibility gate for aviary occupancy.

    Attributes:
        directory (AnimalDirectory): Resolves occupant ids to animals
        rules (Sequence[CompatibilityRule]): Compatibility rule table
    """

    def __init__(
        self,
        directory: AnimalDirectory,
        rules: Sequence[CompatibilityRule] = DEFAULT_RULES,
        logger: Optional[logging.Logger] = None,
    ):
        self.directory = directory
        self.rules = tuple(rules)
        self._logger = logger or logging.getLogger(__name__)

    def _occupant(self, aviary: Aviary, animal_id: str) -> Animal:
        animal = self.directory.get(animal_id)
        if animal is None:
            raise InvariantViolationError(
                f"Aviary '{aviary.id}' holds unknown animal '{animal_id}'"
            )
        return animal

    def check(self, aviary: Aviary, candidate: Optional[Animal]) -> AdmissionDecision:
        """
        Decide whether a candidate may enter an aviary without changing anything.

        Raises:
            InvariantViolationError: If an occupant id cannot be resolved
        """
        if candidate is None:
            return AdmissionDecision.MISSING
        if aviary.contains(candidate.id):
            return AdmissionDecision.DUPLICATE
        if candidate.aviary_id is not None and candidate.aviary_id != aviary.id:
            return AdmissionDecision.ALREADY_PLACED
        if aviary.is_full:
            return AdmissionDecision.FULL

        for occupant_id in aviary.occupant_ids:
            occupant = self._occupant(aviary, occupant_id)
            rule = find_conflict(candidate, occupant, self.rules) or find_conflict(
                occupant, candidate, self.rules
            )
            if rule is not None:
                self._logger.debug(
                    "%s (%s) conflicts with %s (%s): %s",
                    candidate.name,
                    candidate.species,
                    occupant.name,
                    occupant.species,
                    rule.name,
                )
                return AdmissionDecision.INCOMPATIBLE

        return AdmissionDecision.ADMITTED

    def can_admit(self, aviary: Aviary, candidate: Optional[Animal]) -> bool:
        """Check whether a candidate may enter an aviary."""
        return self.check(aviary, candidate).allowed

    def admit(
        self, aviary: Aviary, candidate: Optional[Animal], index: Optional[int] = None
    ) -> bool:
        """
        Place a candidate into an aviary if the checks pass.

        The placement is all-or-nothing: on rejection neither the aviary nor
        the animal is modified.

        Args:
            aviary: Target aviary
            candidate: Animal to place
            index: Position in the occupant list, appended when omitted

        Returns:
            bool: True if the animal was placed
        """
        decision = self.check(aviary, candidate)
        if not decision.allowed:
            self._logger.warning(
                "Cannot admit %s into aviary %s: %s",
                candidate.name if candidate is not None else None,
                aviary.name,
                decision.value,
            )
            return False

        if index is None:
            aviary.occupant_ids.append(candidate.id)
        else:
            aviary.occupant_ids.insert(index, candidate.id)
        candidate.aviary_id = aviary.id
        self._logger.info("Admitted %s into aviary %s", candidate.name, aviary.name)
        return True

    def evict(self, aviary: Aviary, animal_id: str) -> bool:
        """
        Remove an animal from an aviary.

        The animal's aviary_id is cleared when it points at this aviary.

        Returns:
            bool: False if the animal was not an occupant
        """
        if not aviary.contains(animal_id):
            self._logger.warning("Animal %s is not in aviary %s", animal_id, aviary.name)
            return False

        aviary.occupant_ids.remove(animal_id)
        animal = self.directory.get(animal_id)
        if animal is not None and animal.aviary_id == aviary.id:
            animal.aviary_id = None
        self._logger.info("Evicted %s from aviary %s", animal_id, aviary.name)
        return True
