"""
zoograph - Zoo Layout and Animal Placement Engine

This package models a zoo as a weighted undirected graph of aviaries connected
by paths, and places animals into aviaries under capacity and compatibility
constraints. It includes:

- A generic weighted graph engine with path, distance and connectivity queries
- Admission control driven by a declarative compatibility rule table
- The ZooGraph orchestration layer with animal and caretaker managers
- Repository ports with in-memory and SQLite storage adapters
- A command line interface
"""

__version__ = "0.1.0"
__author__ = "zoograph Team"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("zoograph requires Python 3.10 or higher")

# Import commonly used components for easier access
from .core.graph import Graph
from .core.models import Animal, Aviary, Caretaker, Path
from .zoo import ZooGraph

__all__ = [
    "Animal",
    "Aviary",
    "Caretaker",
    "Graph",
    "Path",
    "ZooGraph",
]
