"""
Caretaker bookkeeping.

Tracks which caretaker looks after which aviaries. An aviary has at most one
caretaker; the link is kept on both sides (Caretaker.aviary_ids and
Aviary.caretaker_id) and both sides are written through on every change.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from ..core.models import Aviary, Caretaker
from ..repositories.base import AviaryRepository, CaretakerRepository
from .base import PersistingComponent

AviaryLookup = Callable[[str], Optional[Aviary]]


class CaretakerManager(PersistingComponent):
    """
    Registry of caretakers and their aviary assignments.

    Attributes:
        repository (CaretakerRepository): Write-through store for caretakers
        aviary_repository (AviaryRepository): Store for the aviary side of each link
    """

    def __init__(
        self,
        repository: CaretakerRepository,
        aviary_repository: AviaryRepository,
        aviary_lookup: AviaryLookup,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger)
        self.repository = repository
        self.aviary_repository = aviary_repository
        self._aviary_lookup = aviary_lookup
        self._caretakers: Dict[str, Caretaker] = {}

    def __len__(self) -> int:
        return len(self._caretakers)

    def all(self) -> List[Caretaker]:
        return list(self._caretakers.values())

    def get(self, caretaker_id: str) -> Optional[Caretaker]:
        return self._caretakers.get(caretaker_id)

    def unassigned(self) -> List[Caretaker]:
        """Caretakers without any aviary."""
        return [caretaker for caretaker in self._caretakers.values() if not caretaker.aviary_ids]

    def caretaker_of(self, aviary_id: str) -> Optional[Caretaker]:
        """The caretaker assigned to an aviary, if any."""
        aviary = self._aviary_lookup(aviary_id)
        if aviary is None or aviary.caretaker_id is None:
            return None
        return self._caretakers.get(aviary.caretaker_id)

    def _register(self, caretaker: Caretaker) -> bool:
        """
        Put a caretaker into the registry and link their aviaries.

        Links to unknown aviaries, or to aviaries that already have another
        caretaker, are dropped.

        Returns:
            bool: False if the id is already registered
        """
        if caretaker.id in self._caretakers:
            self._logger.warning("Caretaker already registered: %s", caretaker.id)
            return False

        kept = []
        for aviary_id in caretaker.aviary_ids:
            aviary = self._aviary_lookup(aviary_id)
            if aviary is None:
                self._logger.warning(
                    "Caretaker %s refers to unknown aviary %s; link dropped",
                    caretaker.name,
                    aviary_id,
                )
                continue
            if aviary.caretaker_id is not None and aviary.caretaker_id != caretaker.id:
                self._logger.warning(
                    "Aviary %s already has caretaker %s; link from %s dropped",
                    aviary.name,
                    aviary.caretaker_id,
                    caretaker.name,
                )
                continue
            aviary.caretaker_id = caretaker.id
            kept.append(aviary_id)

        caretaker.aviary_ids = kept
        self._caretakers[caretaker.id] = caretaker
        return True

    def add(self, caretaker: Caretaker) -> bool:
        """Register a caretaker and store them."""
        if not self._register(caretaker):
            return False
        self._persist(f"caretaker {caretaker.id}", self.repository.insert, caretaker)
        for aviary_id in caretaker.aviary_ids:
            self._persist_aviary_link(aviary_id, caretaker.id)
        self._logger.info("Added caretaker %s", caretaker.name)
        return True

    def load(self, caretakers: Sequence[Caretaker]) -> None:
        """Register caretakers read from the repository, correcting dropped links."""
        for caretaker in caretakers:
            stored_ids = list(caretaker.aviary_ids)
            if self._register(caretaker) and caretaker.aviary_ids != stored_ids:
                self._persist_links(caretaker)
        self._logger.info("Loaded %d caretakers", len(self._caretakers))

    def _persist_links(self, caretaker: Caretaker) -> None:
        self._persist(
            f"aviaries of caretaker {caretaker.id}",
            self.repository.update_link,
            caretaker.id,
            list(caretaker.aviary_ids),
        )

    def _persist_aviary_link(self, aviary_id: str, caretaker_id: Optional[str]) -> None:
        self._persist(
            f"caretaker of aviary {aviary_id}",
            self.aviary_repository.update_link,
            aviary_id,
            caretaker_id,
        )

    def _detach(self, caretaker: Caretaker, aviary_id: str) -> None:
        caretaker.aviary_ids.remove(aviary_id)
        self._persist_links(caretaker)

    def assign(self, caretaker_id: str, aviary_id: str) -> bool:
        """
        Make a caretaker responsible for an aviary.

        A previous caretaker of the aviary loses it.
        """
        caretaker = self._caretakers.get(caretaker_id)
        if caretaker is None:
            self._logger.warning("Caretaker not found: %s", caretaker_id)
            return False
        aviary = self._aviary_lookup(aviary_id)
        if aviary is None:
            self._logger.warning("Aviary not found: %s", aviary_id)
            return False
        if caretaker.cares_for(aviary_id):
            self._logger.warning("%s already cares for aviary %s", caretaker.name, aviary.name)
            return False

        previous = self._caretakers.get(aviary.caretaker_id) if aviary.caretaker_id else None
        if previous is not None and previous.cares_for(aviary_id):
            self._detach(previous, aviary_id)
            self._logger.info("%s no longer cares for aviary %s", previous.name, aviary.name)

        caretaker.aviary_ids.append(aviary_id)
        aviary.caretaker_id = caretaker_id
        self._persist_links(caretaker)
        self._persist_aviary_link(aviary_id, caretaker_id)
        self._logger.info("Assigned %s to aviary %s", caretaker.name, aviary.name)
        return True

    def unassign(self, caretaker_id: str, aviary_id: str) -> bool:
        """Remove an aviary from a caretaker. Only the assigned caretaker can be unassigned."""
        caretaker = self._caretakers.get(caretaker_id)
        if caretaker is None or not caretaker.cares_for(aviary_id):
            self._logger.warning("Caretaker %s is not assigned to aviary %s", caretaker_id, aviary_id)
            return False

        self._detach(caretaker, aviary_id)
        aviary = self._aviary_lookup(aviary_id)
        if aviary is not None and aviary.caretaker_id == caretaker_id:
            aviary.caretaker_id = None
            self._persist_aviary_link(aviary_id, None)
        self._logger.info("Unassigned %s from aviary %s", caretaker.name, aviary_id)
        return True

    def reassign(self, caretaker_id: str, from_id: str, to_id: str) -> bool:
        """Move a caretaker from one of their aviaries to another aviary."""
        caretaker = self._caretakers.get(caretaker_id)
        if caretaker is None or not caretaker.cares_for(from_id):
            self._logger.warning("Caretaker %s is not assigned to aviary %s", caretaker_id, from_id)
            return False
        if self._aviary_lookup(to_id) is None:
            self._logger.warning("Aviary not found: %s", to_id)
            return False
        if caretaker.cares_for(to_id):
            self._logger.warning("%s already cares for aviary %s", caretaker.name, to_id)
            return False

        self.unassign(caretaker_id, from_id)
        return self.assign(caretaker_id, to_id)

    def release_aviary(self, aviary_id: str) -> bool:
        """
        Drop every link to an aviary that is being removed.

        Returns:
            bool: True if a caretaker lost the aviary
        """
        released = False
        for caretaker in self._caretakers.values():
            if caretaker.cares_for(aviary_id):
                self._detach(caretaker, aviary_id)
                self._logger.info("%s released from aviary %s", caretaker.name, aviary_id)
                released = True
        aviary = self._aviary_lookup(aviary_id)
        if aviary is not None:
            aviary.caretaker_id = None
        return released

    def remove(self, caretaker_id: str) -> bool:
        """Delete a caretaker, releasing all of their aviaries."""
        caretaker = self._caretakers.pop(caretaker_id, None)
        if caretaker is None:
            self._logger.warning("Caretaker not found: %s", caretaker_id)
            return False

        for aviary_id in caretaker.aviary_ids:
            aviary = self._aviary_lookup(aviary_id)
            if aviary is not None and aviary.caretaker_id == caretaker_id:
                aviary.caretaker_id = None
                self._persist_aviary_link(aviary_id, None)
        caretaker.aviary_ids = []
        self._persist(f"removal of caretaker {caretaker_id}", self.repository.delete, caretaker_id)
        self._logger.info("Removed caretaker %s", caretaker.name)
        return True
