"""Connected component analysis for the zoo graph.

This module provides functionality for analyzing the structural components of
an undirected graph. It includes methods for:
- Finding connected components (groups of mutually reachable nodes)
- Locating the component that holds a given node
- Identifying isolated nodes

The analysis helps find parts of the facility that cannot be reached from the
rest, such as a newly built aviary that has no path yet.
"""

import logging
from collections import deque
from typing import List, Set

from .types import GraphView

logger = logging.getLogger(__name__)


class ComponentAnalysis:
    """Connected component analysis for undirected graphs.

    The analysis methods are implemented as static methods to provide utility-style
    functionality that can be used with any graph exposing the GraphView protocol
    without maintaining state.
    """

    @staticmethod
    def _find_component_bfs(graph: GraphView, start: str, visited: Set[str]) -> Set[str]:
        """Find all nodes in a component using breadth-first search.

        Args:
            graph (GraphView): The graph instance to analyze.
            start (str): Starting node.
            visited (Set[str]): Set of visited nodes, updated in place.

        Returns:
            Set[str]: Set of nodes in the component.
        """
        component = {start}
        queue = deque([start])
        visited.add(start)

        while queue:
            current_node = queue.popleft()
            for neighbor in graph.neighbors(current_node):
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.add(neighbor)
                    queue.append(neighbor)

        return component

    @staticmethod
    def find_components(graph: GraphView) -> List[Set[str]]:
        """Find the connected components of the graph.

        Components are returned in the insertion order of their first node, so
        the component holding the oldest node always comes first.

        Args:
            graph (GraphView): The graph instance to analyze.

        Returns:
            List[Set[str]]: List of components, each a set of node IDs.
        """
        components: List[Set[str]] = []
        visited: Set[str] = set()

        for node in graph.nodes():
            if node not in visited:
                components.append(ComponentAnalysis._find_component_bfs(graph, node, visited))

        logger.debug("Found %d connected components", len(components))
        return components

    @staticmethod
    def component_of(graph: GraphView, node_id: str) -> Set[str]:
        """Return the component containing a node, or an empty set if it is absent."""
        if not graph.has_node(node_id):
            return set()
        return ComponentAnalysis._find_component_bfs(graph, node_id, set())

    @staticmethod
    def isolated_nodes(graph: GraphView) -> List[str]:
        """Return the nodes with no incident edges, in insertion order."""
        return [node for node in graph.nodes() if not graph.neighbors(node)]
