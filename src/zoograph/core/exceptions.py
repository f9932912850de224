"""
Custom exceptions for the zoo graph system.

This module defines the hierarchy of custom exceptions used throughout the system.
Expected domain conditions such as a full aviary, a missing node or an unreachable
destination are reported through return values and never raise; the exceptions
below cover invalid input to model constructors, storage failures, configuration
problems and corrupted internal state.
"""


class ValidationError(Exception):
    """
    Raised when data validation fails.

    Storage adapters raise it when a record about to be written fails its
    schema.

    Examples:
        * Aviary record with a negative area written to storage
        * Animal record with an unknown category
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class StorageError(Exception):
    """
    Raised when storage operations fail.

    Repository adapters wrap driver errors in this exception so that the
    orchestration layer can log persistence failures uniformly.

    Examples:
        * Database connection failures
        * Constraint violations on insert
    """


class GraphOperationError(Exception):
    """
    Raised when graph operations fail in a way callers cannot recover from.

    Examples:
        * Edge pair found with only one direction present
        * Occupant id missing from the animal arena
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class InvariantViolationError(GraphOperationError):
    """
    Raised when an internal invariant is found broken.

    This signals a programming error rather than a user or domain condition.
    """


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Unknown log level
        * Unusable database path
    """


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    Lookups in the public API return None instead; this exception is used
    by helpers that require the resource to exist.
    """


class NodeNotFoundError(ResourceNotFoundError):
    """Raised when a requested node is not found."""


class EdgeNotFoundError(ResourceNotFoundError):
    """Raised when a requested edge is not found."""


class DuplicateResourceError(Exception):
    """
    Raised when attempting to create a duplicate resource.

    Examples:
        * Inserting an aviary whose id already exists in storage
    """
