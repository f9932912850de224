"""
Shared persistence helper for the zoo managers.

Every mutation in the zoo layer changes memory first and then writes through
to a repository. A failed write is logged at ERROR and does not undo the
in-memory change; the next load reconciles memory with what was stored.
"""

import logging
from typing import Any, Callable, Optional

from ..core.exceptions import DuplicateResourceError, StorageError, ValidationError


class PersistingComponent:
    """
    Base for components that write their changes through to repositories.

    Attributes:
        _logger (logging.Logger): Injected logger, or the subclass module logger
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(type(self).__module__)

    def _persist(self, action: str, operation: Callable[..., Any], *args: Any) -> bool:
        """
        Run a repository operation, logging instead of raising on failure.

        Args:
            action: Description used in the error message
            operation: Repository method to call
            *args: Arguments for the operation

        Returns:
            bool: True if the write succeeded
        """
        try:
            operation(*args)
            return True
        except (StorageError, DuplicateResourceError, ValidationError) as e:
            self._logger.error("Failed to persist %s: %s", action, str(e))
            return False
