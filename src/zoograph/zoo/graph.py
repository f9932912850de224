"""
Zoo graph orchestration.

ZooGraph binds aviaries and the paths between them into one weighted graph,
keeps it in step with the four repositories, and exposes the combined query
and mutation surface. Animals and caretakers are managed by the AnimalManager
and CaretakerManager it owns.

Loading reconciles stored state in dependency order:
1. Aviaries become graph nodes
2. Paths become edges; a path with an unknown endpoint or invalid length is dropped
3. Animals are placed into their aviaries; an animal whose aviary is unknown
   or refuses it is left unplaced
4. Caretakers are linked to their aviaries; links to unknown aviaries are dropped

A repository that fails to load is logged and treated as empty.
"""

import logging
from typing import Callable, List, Optional, Sequence, Set, TypeVar

from ..core.compatibility import DEFAULT_RULES, CompatibilityRule
from ..core.exceptions import EdgeNotFoundError, NodeNotFoundError, StorageError
from ..core.graph import Graph
from ..core.models import Aviary, Path
from ..core.paths import PathResult
from ..repositories.base import (
    AnimalRepository,
    AviaryRepository,
    CaretakerRepository,
    PathRepository,
)
from .animals import AnimalManager
from .base import PersistingComponent
from .caretakers import CaretakerManager

T = TypeVar("T")


class ZooGraph(PersistingComponent):
    """
    The zoo as a graph of aviaries connected by paths.

    Mutations change memory first and then write through to the
    repositories. A failed write is logged and not rolled back.

    Attributes:
        aviary_repository (AviaryRepository): Store for aviaries
        path_repository (PathRepository): Store for paths
        animals (AnimalManager): Animal arena and placement
        caretakers (CaretakerManager): Caretaker assignments
    """

    def __init__(
        self,
        aviary_repository: AviaryRepository,
        path_repository: PathRepository,
        animal_repository: AnimalRepository,
        caretaker_repository: CaretakerRepository,
        *,
        logger: Optional[logging.Logger] = None,
        rules: Sequence[CompatibilityRule] = DEFAULT_RULES,
        cache_size: int = 1000,
    ):
        """
        Build the graph from the repositories.

        Args:
            aviary_repository: Store for aviaries
            path_repository: Store for paths
            animal_repository: Store for animals
            caretaker_repository: Store for caretakers
            logger: Logger to report through, the module logger when omitted
            rules: Compatibility rule table used for admission
            cache_size: Maximum number of cached path queries
        """
        super().__init__(logger)
        self.aviary_repository = aviary_repository
        self.path_repository = path_repository
        self._graph: Graph[Aviary] = Graph(cache_size=cache_size, logger=self._logger)
        self.animals = AnimalManager(
            animal_repository, self.get_aviary, rules=rules, logger=self._logger
        )
        self.caretakers = CaretakerManager(
            caretaker_repository, aviary_repository, self.get_aviary, logger=self._logger
        )
        self._load()

    # Loading

    def _load_from(self, name: str, loader: Callable[[], List[T]]) -> List[T]:
        try:
            items = loader()
        except StorageError as e:
            self._logger.error("Error loading %s: %s", name, str(e))
            return []
        self._logger.info("Loaded %d %s from storage", len(items), name)
        return items

    def _load(self) -> None:
        for aviary in self._load_from("aviaries", self.aviary_repository.load_all):
            # Occupants are rebuilt from the animal records.
            aviary.occupant_ids = []
            if not self._graph.add_node(aviary.id, aviary):
                self._logger.warning("Duplicate aviary %s skipped", aviary.id)

        for path in self._load_from("paths", self.path_repository.load_all):
            if not (self._graph.has_node(path.from_id) and self._graph.has_node(path.to_id)):
                self._logger.warning(
                    "Path missed: no aviary found for %s or %s", path.from_id, path.to_id
                )
                continue
            self._graph.add_edge(path.from_id, path.to_id, path.length)

        self.animals.load(self._load_from("animals", self.animals.repository.load_all))

        stored_caretakers = {aviary.id: aviary.caretaker_id for aviary in self.aviaries()}
        for aviary in self.aviaries():
            aviary.caretaker_id = None
        self.caretakers.load(self._load_from("caretakers", self.caretakers.repository.load_all))
        for aviary in self.aviaries():
            if aviary.caretaker_id != stored_caretakers[aviary.id]:
                self._persist(
                    f"caretaker of aviary {aviary.id}",
                    self.aviary_repository.update_link,
                    aviary.id,
                    aviary.caretaker_id,
                )

        self._logger.debug(
            "Zoo loaded: %d aviaries, %d paths", self._graph.node_count, self._graph.edge_count
        )

    # Aviaries

    def add_aviary(self, aviary: Aviary) -> bool:
        """
        Add a new aviary.

        New aviaries must be empty and have no caretaker; animals and
        caretakers are attached afterwards through the managers.

        Returns:
            bool: False if the aviary is not empty or its id is taken
        """
        if aviary.occupant_ids or aviary.caretaker_id is not None:
            self._logger.warning(
                "Aviary %s must be added empty and without a caretaker", aviary.name
            )
            return False
        if not self._graph.add_node(aviary.id, aviary):
            self._logger.warning("Aviary already exists: %s", aviary.id)
            return False

        self._persist(f"aviary {aviary.id}", self.aviary_repository.insert, aviary)
        self._logger.info("Aviary added: %s", aviary.name)
        return True

    def remove_aviary(self, aviary_id: str) -> bool:
        """
        Remove an aviary.

        Its animals are left unplaced, its caretaker loses it and every path
        touching it is removed.
        """
        aviary = self._graph.get_node(aviary_id)
        if aviary is None:
            self._logger.warning("Aviary not found: %s", aviary_id)
            return False

        self.animals.release_aviary(aviary)
        self.caretakers.release_aviary(aviary_id)
        neighbors = self._graph.neighbors(aviary_id)
        self._graph.remove_node(aviary_id)

        for neighbor in neighbors:
            self._persist(
                f"removal of path {aviary_id} - {neighbor}",
                self.path_repository.delete,
                (aviary_id, neighbor),
            )
        self._persist(f"removal of aviary {aviary_id}", self.aviary_repository.delete, aviary_id)
        self._logger.info("Aviary removed: %s", aviary.name)
        return True

    def aviaries(self) -> List[Aviary]:
        """All aviaries in insertion order."""
        return [self._graph.get_node(node_id) for node_id in self._graph.nodes()]

    def get_aviary(self, aviary_id: str) -> Optional[Aviary]:
        return self._graph.get_node(aviary_id)

    def require_aviary(self, aviary_id: str) -> Aviary:
        """
        Get an aviary that must exist.

        Raises:
            NodeNotFoundError: If there is no aviary with this id
        """
        aviary = self._graph.get_node(aviary_id)
        if aviary is None:
            raise NodeNotFoundError(f"Aviary '{aviary_id}' not found")
        return aviary

    def find_aviary(self, name_or_id: str) -> Optional[Aviary]:
        """Look an aviary up by id, falling back to the first aviary with that name."""
        aviary = self._graph.get_node(name_or_id)
        if aviary is not None:
            return aviary
        return next((a for a in self.aviaries() if a.name == name_or_id), None)

    def aviary_name(self, aviary_id: str) -> Optional[str]:
        aviary = self._graph.get_node(aviary_id)
        if aviary is None:
            self._logger.warning("Aviary not found by id: %s", aviary_id)
            return None
        return aviary.name

    # Paths

    def add_path(self, from_id: str, to_id: str, length: float) -> bool:
        """
        Connect two aviaries.

        Returns:
            bool: False if an aviary is missing, the length is not positive,
                the endpoints are equal or the path already exists
        """
        try:
            path = Path(from_id, to_id, length)
        except (ValueError, TypeError) as e:
            self._logger.warning("Cannot add path %s - %s: %s", from_id, to_id, str(e))
            return False
        if self._graph.has_edge(from_id, to_id):
            self._logger.warning("Path %s - %s already exists", from_id, to_id)
            return False
        if not self._graph.add_edge(from_id, to_id, length):
            return False

        self._persist(f"path {from_id} - {to_id}", self.path_repository.insert, path)
        self._logger.info("Path added: %s <-> %s (%s m)", from_id, to_id, length)
        return True

    def remove_path(self, from_id: str, to_id: str) -> bool:
        if not self._graph.remove_edge(from_id, to_id):
            self._logger.warning("Path %s - %s not found", from_id, to_id)
            return False
        self._persist(
            f"removal of path {from_id} - {to_id}", self.path_repository.delete, (from_id, to_id)
        )
        self._logger.info("Path removed: %s <-> %s", from_id, to_id)
        return True

    def update_path_length(self, from_id: str, to_id: str, length: float) -> bool:
        """Change the length of an existing path."""
        if not self._graph.has_edge(from_id, to_id):
            self._logger.warning("Path %s - %s not found", from_id, to_id)
            return False
        try:
            Path(from_id, to_id, length)
        except (ValueError, TypeError) as e:
            self._logger.warning("Cannot update path %s - %s: %s", from_id, to_id, str(e))
            return False

        self._graph.add_edge(from_id, to_id, length)
        self._persist(
            f"length of path {from_id} - {to_id}",
            self.path_repository.update_link,
            from_id,
            to_id,
            length,
        )
        self._logger.info("Path %s <-> %s length set to %s m", from_id, to_id, length)
        return True

    def paths(self) -> List[Path]:
        """Every path once, oriented from the smaller to the larger aviary id."""
        return [Path.from_edge(edge) for edge in self._graph.edges()]

    def get_path(self, from_id: str, to_id: str) -> Optional[Path]:
        edge = self._graph.get_edge(from_id, to_id)
        return Path.from_edge(edge) if edge is not None else None

    def require_path(self, from_id: str, to_id: str) -> Path:
        """
        Get a path that must exist.

        Raises:
            EdgeNotFoundError: If the two aviaries are not directly connected
        """
        path = self.get_path(from_id, to_id)
        if path is None:
            raise EdgeNotFoundError(f"No path exists between '{from_id}' and '{to_id}'")
        return path

    @property
    def aviary_count(self) -> int:
        return self._graph.node_count

    @property
    def path_count(self) -> int:
        return self._graph.edge_count

    # Queries

    def neighbors(self, aviary_id: str) -> List[str]:
        """Ids of the aviaries directly connected to an aviary."""
        return self._graph.neighbors(aviary_id)

    def neighbor_names(self, aviary_id: str) -> List[str]:
        return [self._graph.get_node(node_id).name for node_id in self._graph.neighbors(aviary_id)]

    def hop_path(self, from_id: str, to_id: str) -> List[str]:
        """Aviary ids along the route with the fewest paths."""
        return self._graph.find_path(from_id, to_id)

    def shortest_path(self, from_id: str, to_id: str) -> List[str]:
        """Aviary ids along the route with the smallest total length."""
        self._logger.debug("Finding shortest path from %s to %s", from_id, to_id)
        return self._graph.find_path_by_weight(from_id, to_id)

    def distance_between(self, from_id: str, to_id: str) -> Optional[float]:
        """Total length of the shortest route, None if the aviaries are not connected."""
        return self._graph.distance(from_id, to_id)

    def route(self, from_id: str, to_id: str, weighted: bool = True) -> PathResult:
        """Find a route and report why none exists when the query fails."""
        return self._graph.route(from_id, to_id, weighted=weighted)

    def is_fully_connected(self) -> bool:
        """Whether every aviary can be reached from every other."""
        connected = self._graph.is_connected()
        self._logger.info("Zoo connectivity check: %s", "connected" if connected else "disconnected")
        return connected

    def components(self) -> List[Set[str]]:
        """Groups of mutually reachable aviary ids."""
        return self._graph.connected_components()

    # Placement

    def admit(self, aviary_id: str, animal_id: str) -> bool:
        return self.animals.admit(aviary_id, animal_id)

    def evict(self, aviary_id: str, animal_id: str) -> bool:
        return self.animals.evict(aviary_id, animal_id)

    def move(self, from_id: str, to_id: str, animal_id: str) -> bool:
        return self.animals.move(from_id, to_id, animal_id)
