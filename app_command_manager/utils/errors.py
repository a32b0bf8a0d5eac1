"""
Error types raised by the application command manager.
"""

from typing import Any, Optional


class CommandManagerError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(CommandManagerError):
    """Missing or invalid construction input."""


class DiscoveryError(CommandManagerError):
    """
    A command directory is missing, unreadable, empty or yields nothing valid.

    When files were read but none was accepted, ``report`` holds the
    LoadReport with the per-file failure reasons.
    """

    def __init__(self, path: Any, reason: str, report: Any = None):
        self.path = str(path) if path is not None else None
        self.reason = reason
        self.report = report
        super().__init__(f"{reason}: {self.path}" if self.path else reason)


class ValidationError(CommandManagerError):
    """A single command descriptor violates a platform constraint."""

    def __init__(self, field: Optional[str], constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(constraint)


class SyncError(CommandManagerError):
    """
    Publishing commands to the remote API failed.

    ``destination_id`` is set when a single destination failed; an aggregate
    failure of a multi-destination sync carries the full ``report`` instead.
    """

    def __init__(
        self,
        message: str,
        destination_id: Optional[str] = None,
        report: Any = None,
    ):
        self.destination_id = destination_id
        self.report = report
        super().__init__(message)


class NotReadyError(SyncError):
    """The remote client is not connected yet."""

    def __init__(self, message: str = "Client is not ready"):
        super().__init__(message)
