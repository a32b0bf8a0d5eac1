"""
Utility modules for the application command manager.
"""

from .logger import LoggerMixin, get_logger, setup_logging
from .errors import (
    CommandManagerError,
    ConfigurationError,
    DiscoveryError,
    NotReadyError,
    SyncError,
    ValidationError,
)
from .validation import ValidationResult, ValidationUtils
from .error_handler import ErrorHandler, get_error_handler

__all__ = [
    "LoggerMixin",
    "get_logger",
    "setup_logging",
    "CommandManagerError",
    "ConfigurationError",
    "DiscoveryError",
    "NotReadyError",
    "SyncError",
    "ValidationError",
    "ValidationResult",
    "ValidationUtils",
    "ErrorHandler",
    "get_error_handler",
]
