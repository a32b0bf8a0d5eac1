"""
Application command registry and synchronization for Discord bots.
"""

__version__ = "1.0.0"
__description__ = "Discover, validate, sync and throttle Discord application commands"

from .bot.config import ManagerConfig
from .commands.manager import ApplicationCommandManager
from .utils.errors import (
    CommandManagerError,
    ConfigurationError,
    DiscoveryError,
    NotReadyError,
    SyncError,
    ValidationError,
)

__all__ = [
    "ApplicationCommandManager",
    "ManagerConfig",
    "CommandManagerError",
    "ConfigurationError",
    "DiscoveryError",
    "NotReadyError",
    "SyncError",
    "ValidationError",
    "__version__",
]
