"""
Error Handler
Maps command manager failures into host-facing messages
"""

import traceback
from typing import Dict, Optional

from app_command_manager.utils.errors import (
    CommandManagerError,
    DiscoveryError,
    NotReadyError,
    SyncError,
)
from app_command_manager.utils.logger import get_logger


class ErrorHandler:
    """Logs failures with context and counts them per context."""

    def __init__(self):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}

    def handle_exception(self, error: BaseException, context: str = "") -> str:
        """
        Handle an exception.

        Args:
            error: The exception that occurred
            context: Optional context string

        Returns:
            Human-readable message suitable for the host's error reporting
        """
        error_key = f"{context}:{type(error).__name__}"

        if context:
            self.logger.error(f"[{context}] {error}")
        else:
            self.logger.error(f"{error}")

        # Unexpected errors get a traceback at debug level
        if not isinstance(error, CommandManagerError):
            self.logger.debug(
                "Traceback:\n" + "".join(traceback.format_exception(type(error), error, error.__traceback__))
            )

        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        return self.describe(error)

    @staticmethod
    def describe(error: BaseException) -> str:
        """Short description with the path or destination the error concerns."""
        if isinstance(error, NotReadyError):
            return f"Client not ready: {error}"
        if isinstance(error, SyncError) and error.destination_id:
            return f"{error} (guild {error.destination_id})"
        if isinstance(error, DiscoveryError):
            return str(error)
        return str(error) or type(error).__name__

    def count(self, context: str) -> int:
        """Total errors recorded for a context."""
        prefix = f"{context}:"
        return sum(n for key, n in self.error_counts.items() if key.startswith(prefix))

    def reset(self) -> None:
        """Clear error counts."""
        self.error_counts.clear()


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler
