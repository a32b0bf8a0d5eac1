"""
Command system: descriptors, registry, discovery, sync and cooldowns.
"""

from .descriptor import CommandDescriptor, CommandOption, CommandType
from .command_registry import CommandRegistry
from .cooldowns import CooldownTracker
from .loader import CommandLoader, LoadFailure, LoadReport
from .synchronizer import CommandSynchronizer, SyncReport
from .plugins import FunctionRegistry, FunctionResult, register_functions
from .manager import ApplicationCommandManager

__all__ = [
    "CommandDescriptor",
    "CommandOption",
    "CommandType",
    "CommandRegistry",
    "CooldownTracker",
    "CommandLoader",
    "LoadFailure",
    "LoadReport",
    "CommandSynchronizer",
    "SyncReport",
    "FunctionRegistry",
    "FunctionResult",
    "register_functions",
    "ApplicationCommandManager",
]
