"""Core graph and admission functionality."""

from .enums import AdmissionDecision, AnimalCategory, PathStatus
from .exceptions import (
    ConfigurationError,
    DuplicateResourceError,
    GraphOperationError,
    InvariantViolationError,
    NodeNotFoundError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)
from .models import Animal, Aviary, Caretaker, Edge, Node, Path
from .types import AnimalDirectory, GraphView
from .paths import PathResult
from .graph import Graph
from .components import ComponentAnalysis
from .compatibility import (
    DEFAULT_RULES,
    CompatibilityRule,
    Trait,
    are_compatible,
    is_compatible,
)
from .admission import AdmissionController

__all__ = [
    "AdmissionController",
    "AdmissionDecision",
    "Animal",
    "AnimalCategory",
    "AnimalDirectory",
    "Aviary",
    "Caretaker",
    "CompatibilityRule",
    "ComponentAnalysis",
    "ConfigurationError",
    "DEFAULT_RULES",
    "DuplicateResourceError",
    "Edge",
    "Graph",
    "GraphOperationError",
    "GraphView",
    "InvariantViolationError",
    "Node",
    "NodeNotFoundError",
    "Path",
    "PathResult",
    "PathStatus",
    "ResourceNotFoundError",
    "StorageError",
    "Trait",
    "ValidationError",
    "are_compatible",
    "is_compatible",
]
