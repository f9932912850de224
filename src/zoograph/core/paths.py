"""
Route query results.

A route query has several distinct failure causes that a bare empty list
cannot tell apart. PathResult carries the outcome as a PathStatus together
with the node sequence and its total weight.

Example:
    >>> result = graph.route("a1", "a2")
    >>> if result.found:
    ...     print(result.nodes, result.total_weight)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .enums import PathStatus


@dataclass(frozen=True)
class PathResult:
    """
    Outcome of a route query.

    Attributes:
        status: Why the query ended the way it did
        nodes: Node ids from start to end, empty unless found
        total_weight: Sum of the edge weights along nodes, None unless found
    """

    status: PathStatus
    nodes: List[str] = field(default_factory=list)
    total_weight: Optional[float] = None

    def __post_init__(self):
        """Validate initialization parameters."""
        if self.status is PathStatus.FOUND:
            if not self.nodes:
                raise ValueError("a found path must contain at least one node")
            if self.total_weight is None:
                raise ValueError("a found path must carry its total weight")
        elif self.nodes or self.total_weight is not None:
            raise ValueError(f"a {self.status.value} result carries no path")

    @property
    def found(self) -> bool:
        return self.status is PathStatus.FOUND

    @property
    def hops(self) -> int:
        """Number of edges traversed, 0 when no path was found."""
        return max(len(self.nodes) - 1, 0)

    @classmethod
    def success(cls, nodes: List[str], total_weight: float) -> "PathResult":
        return cls(PathStatus.FOUND, list(nodes), float(total_weight))

    @classmethod
    def failure(cls, status: PathStatus) -> "PathResult":
        return cls(status)
