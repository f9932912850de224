"""
Core graph data structure with efficient adjacency list representation.

This module provides the generic Graph class used to model the facility as a
weighted undirected graph. Every logical connection is stored as a matching
pair of directed Edge entries, one per direction, so neighbour lookups from
either endpoint are constant time.

Each node carries an optional payload of type T. The graph never inspects the
payload; callers that need the domain object retrieve it with get_node()
instead of downcasting.

Failed mutations (missing endpoint, bad weight) are logged and reported by a
False return value rather than raised. Path queries are memoized in an LRU
cache that is cleared on every structural change.
"""

import heapq
import logging
import math
from collections import deque
from typing import Dict, Generic, Iterator, List, Optional, Set, Tuple, TypeVar

from ..infrastructure.cache import LRUCache
from .components import ComponentAnalysis
from .enums import PathStatus
from .exceptions import InvariantViolationError
from .models import Edge
from .paths import PathResult

T = TypeVar("T")  # Type of node payloads


class Graph(Generic[T]):
    """
    Weighted undirected graph with payload-carrying nodes.

    Attributes:
        _nodes (Dict[str, Optional[T]]): Node payloads in insertion order
        _adjacency (Dict[str, Dict[str, Edge]]): Outgoing entries per node
        _edge_count (int): Number of logical (undirected) edges
        _path_cache (LRUCache): Cache for path queries
    """

    def __init__(self, cache_size: int = 1000, logger: Optional[logging.Logger] = None):
        """
        Initialize an empty graph.

        Args:
            cache_size (int): Maximum number of path queries to cache (default: 1000)
            logger (Optional[logging.Logger]): Logger to report through, the
                module logger when omitted
        """
        self._nodes: Dict[str, Optional[T]] = {}
        self._adjacency: Dict[str, Dict[str, Edge]] = {}
        self._edge_count = 0
        self._path_cache = LRUCache[List[str]](max_size=cache_size)
        self._logger = logger or logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # Nodes

    def add_node(self, node_id: str, payload: Optional[T] = None) -> bool:
        """
        Add a node to the graph.

        Re-adding an existing node is a no-op that leaves the stored payload
        untouched.

        Returns:
            bool: True if the node was added, False if it already existed or
                the id is not a non-empty string
        """
        if not isinstance(node_id, str) or not node_id.strip():
            self._logger.warning("Cannot add node with invalid id %r", node_id)
            return False
        if node_id in self._nodes:
            self._logger.debug("Node %s already present", node_id)
            return False
        self._nodes[node_id] = payload
        self._adjacency[node_id] = {}
        self.clear_path_cache()
        return True

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and every edge incident to it."""
        if node_id not in self._nodes:
            return False

        for neighbor in list(self._adjacency[node_id]):
            self._unlink(node_id, neighbor)
        del self._adjacency[node_id]
        del self._nodes[node_id]
        self.clear_path_cache()
        return True

    def has_node(self, node_id: str) -> bool:
        """Check if a node exists in the graph."""
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Optional[T]:
        """Get the payload stored for a node, or None if the node is absent."""
        return self._nodes.get(node_id)

    def nodes(self) -> List[str]:
        """Get all node ids in insertion order."""
        return list(self._nodes)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    # Edges

    def add_edge(self, from_node: str, to_node: str, weight: float) -> bool:
        """
        Connect two existing nodes.

        Both directed entries are inserted. Connecting an already connected
        pair replaces the weight in both directions.

        Args:
            from_node (str): One endpoint
            to_node (str): The other endpoint
            weight (float): Non-negative, finite traversal cost

        Returns:
            bool: True on success, False if an endpoint is missing, the pair is
                a self-loop or the weight is invalid
        """
        if from_node not in self._nodes or to_node not in self._nodes:
            missing = from_node if from_node not in self._nodes else to_node
            self._logger.warning(
                "Cannot connect %s and %s: node %s not found", from_node, to_node, missing
            )
            return False
        if from_node == to_node:
            self._logger.warning("Cannot connect node %s to itself", from_node)
            return False
        if (
            isinstance(weight, bool)
            or not isinstance(weight, (int, float))
            or not math.isfinite(weight)
            or weight < 0
        ):
            self._logger.warning(
                "Cannot connect %s and %s: invalid weight %r", from_node, to_node, weight
            )
            return False

        edge = Edge(from_node, to_node, float(weight))
        if to_node not in self._adjacency[from_node]:
            self._edge_count += 1
        self._adjacency[from_node][to_node] = edge
        self._adjacency[to_node][from_node] = edge.reversed()
        self.clear_path_cache()
        self._logger.debug("Connected %s and %s with weight %s", from_node, to_node, weight)
        return True

    def remove_edge(self, from_node: str, to_node: str) -> bool:
        """Remove both directions of an edge. Returns False if none existed."""
        if not self.has_edge(from_node, to_node):
            return False
        self._unlink(from_node, to_node)
        self.clear_path_cache()
        return True

    def _unlink(self, from_node: str, to_node: str) -> None:
        """Delete both entries of an edge pair."""
        forward = self._adjacency.get(from_node, {}).pop(to_node, None)
        backward = self._adjacency.get(to_node, {}).pop(from_node, None)
        if (forward is None) != (backward is None):
            raise InvariantViolationError(
                f"Edge between '{from_node}' and '{to_node}' is missing one direction"
            )
        if forward is not None:
            self._edge_count -= 1

    def get_edge(self, from_node: str, to_node: str) -> Optional[Edge]:
        """Get the edge entry from one node to another if it exists."""
        return self._adjacency.get(from_node, {}).get(to_node)

    def has_edge(self, from_node: str, to_node: str) -> bool:
        """Check if the two nodes are connected."""
        return self.get_edge(from_node, to_node) is not None

    def neighbors(self, node_id: str) -> List[str]:
        """Get adjacent node ids in the order their edges were added."""
        return list(self._adjacency.get(node_id, {}))

    def edges(self) -> Iterator[Edge]:
        """
        Iterate over the logical edges.

        Each undirected connection is yielded once, oriented from the smaller
        to the larger node id.
        """
        for node_id, entries in self._adjacency.items():
            for neighbor, edge in entries.items():
                if node_id < neighbor:
                    yield edge

    @property
    def edge_count(self) -> int:
        """Number of logical (undirected) edges."""
        return self._edge_count

    # Queries

    def clear_path_cache(self) -> None:
        """Clear the path cache."""
        self._path_cache.clear()

    def get_path_cache_stats(self) -> Dict[str, float]:
        """Get statistics about the path cache."""
        return self._path_cache.get_metrics()

    def _cached(self, algo: str, start: str, end: str) -> Optional[List[str]]:
        cached = self._path_cache.get((algo, start, end))
        return list(cached) if cached is not None else None

    def find_path(self, start: str, end: str) -> List[str]:
        """
        Find the path with the fewest hops using breadth-first search.

        Neighbours are expanded in ascending id order, so among equally short
        paths the result does not depend on edge insertion order.

        Returns:
            List[str]: Node ids from start to end, [start] when start == end,
                [] when either node is missing or end is unreachable
        """
        if start not in self._nodes or end not in self._nodes:
            return []
        cached = self._cached("bfs", start, end)
        if cached is not None:
            return cached

        path = self._bfs(start, end)
        self._path_cache.put(("bfs", start, end), list(path))
        return path

    def _bfs(self, start: str, end: str) -> List[str]:
        parents: Dict[str, Optional[str]] = {start: None}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                return self._reconstruct(parents, end)
            for neighbor in sorted(self._adjacency[current]):
                if neighbor not in parents:
                    parents[neighbor] = current
                    queue.append(neighbor)

        self._logger.debug("No path from %s to %s", start, end)
        return []

    def find_path_by_weight(self, start: str, end: str) -> List[str]:
        """
        Find the minimum-weight path using Dijkstra's algorithm.

        The priority queue is ordered by (distance, node id) and a distance is
        only replaced by a strictly smaller one. Between equal-cost paths the
        predecessor settled first wins: lower tentative distance, then lower id.

        Returns:
            List[str]: Node ids from start to end, [start] when start == end,
                [] when either node is missing or end is unreachable
        """
        if start not in self._nodes or end not in self._nodes:
            return []
        cached = self._cached("dijkstra", start, end)
        if cached is not None:
            return cached

        path = self._dijkstra(start, end)
        self._path_cache.put(("dijkstra", start, end), list(path))
        return path

    def _dijkstra(self, start: str, end: str) -> List[str]:
        distances: Dict[str, float] = {start: 0.0}
        parents: Dict[str, Optional[str]] = {start: None}
        settled: Set[str] = set()
        heap: List[Tuple[float, str]] = [(0.0, start)]

        while heap:
            dist, current = heapq.heappop(heap)
            if current in settled:
                continue
            settled.add(current)
            if current == end:
                return self._reconstruct(parents, end)

            for neighbor, edge in self._adjacency[current].items():
                if neighbor in settled:
                    continue
                candidate = dist + edge.weight
                if candidate < distances.get(neighbor, math.inf):
                    distances[neighbor] = candidate
                    parents[neighbor] = current
                    heapq.heappush(heap, (candidate, neighbor))

        self._logger.debug("No weighted path from %s to %s", start, end)
        return []

    @staticmethod
    def _reconstruct(parents: Dict[str, Optional[str]], end: str) -> List[str]:
        path = []
        current: Optional[str] = end
        while current is not None:
            path.append(current)
            current = parents[current]
        path.reverse()
        return path

    def path_weight(self, path: List[str]) -> float:
        """Sum the edge weights along a node sequence."""
        total = 0.0
        for from_node, to_node in zip(path, path[1:]):
            edge = self.get_edge(from_node, to_node)
            if edge is None:
                raise InvariantViolationError(
                    f"Path step '{from_node}' -> '{to_node}' has no edge"
                )
            total += edge.weight
        return total

    def distance(self, from_node: str, to_node: str) -> Optional[float]:
        """
        Length of the minimum-weight path between two nodes.

        Returns:
            Optional[float]: 0.0 for the same existing node, None when either
                node is missing or they are not connected
        """
        path = self.find_path_by_weight(from_node, to_node)
        if not path:
            return None
        return self.path_weight(path)

    def route(self, start: str, end: str, weighted: bool = True) -> PathResult:
        """
        Find a path and report why none exists when the query fails.

        Args:
            start (str): Start node id
            end (str): End node id
            weighted (bool): Minimise total weight (True) or hop count (False)

        Returns:
            PathResult: FOUND with the nodes and total weight, otherwise
                INVALID, NODE_NOT_FOUND or NO_PATH
        """
        for node_id in (start, end):
            if not isinstance(node_id, str) or not node_id.strip():
                return PathResult.failure(PathStatus.INVALID)
        if start not in self._nodes or end not in self._nodes:
            return PathResult.failure(PathStatus.NODE_NOT_FOUND)

        path = self.find_path_by_weight(start, end) if weighted else self.find_path(start, end)
        if not path:
            return PathResult.failure(PathStatus.NO_PATH)
        return PathResult.success(path, self.path_weight(path))

    def is_connected(self) -> bool:
        """
        Check whether every node is reachable from the first inserted node.

        Empty and single-node graphs are connected.
        """
        if len(self._nodes) <= 1:
            return True
        first = next(iter(self._nodes))
        reached = ComponentAnalysis.component_of(self, first)
        return len(reached) == len(self._nodes)

    def connected_components(self) -> List[Set[str]]:
        """Get the connected components in order of their first node."""
        return ComponentAnalysis.find_components(self)
