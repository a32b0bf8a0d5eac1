"""
Command Registry
Authoritative in-memory mapping of command name to descriptor
"""

from pathlib import Path
from typing import Dict, List, Optional

from app_command_manager.commands.descriptor import CommandDescriptor
from app_command_manager.utils.logger import get_logger


class CommandRegistry:
    """
    Name-keyed store of validated command descriptors.

    Writing a name that already exists overwrites it (last writer wins),
    whether the duplicate comes from a second directory or a reload.
    """

    def __init__(self):
        self.logger = get_logger("CommandRegistry")
        self.commands: Dict[str, CommandDescriptor] = {}
        self._directory: Optional[Path] = None
        self._providing_cwd = False

    def clear(self) -> "CommandRegistry":
        """
        Remove every cached command.

        Returns:
            Self for chaining
        """
        self.commands.clear()
        self.logger.debug("Cleared all commands")
        return self

    def size(self) -> int:
        """Number of cached commands."""
        return len(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def list(self) -> List[CommandDescriptor]:
        """
        Snapshot of all descriptors.

        Order is unspecified; sort by name when determinism matters.
        """
        return list(self.commands.values())

    def names(self) -> List[str]:
        """Sorted list of registered command names."""
        return sorted(self.commands)

    def upsert(self, descriptor: CommandDescriptor) -> bool:
        """
        Insert or overwrite a descriptor by name.

        Args:
            descriptor: Validated descriptor

        Returns:
            True if an existing command was replaced
        """
        replaced = descriptor.name in self.commands
        self.commands[descriptor.name] = descriptor

        if replaced:
            self.logger.debug(f"Replaced command: {descriptor.name}")
        else:
            self.logger.debug(f"Registered command: {descriptor.name}")
        return replaced

    def get(self, name: str) -> Optional[CommandDescriptor]:
        """
        Get a command by name.

        Args:
            name: Command name

        Returns:
            Descriptor or None if not found
        """
        return self.commands.get(name)

    def has(self, name: str) -> bool:
        """Check if command exists."""
        return name in self.commands

    def set_directory(self, directory: Path, providing_cwd: bool) -> None:
        """Record the root directory used by reload()."""
        self._directory = directory
        self._providing_cwd = providing_cwd

    @property
    def last_directory(self) -> Optional[Path]:
        """The most recently loaded root directory, or None."""
        return self._directory

    @property
    def providing_cwd(self) -> bool:
        """True if the recorded directory is used as given rather than cwd-relative."""
        return self._providing_cwd
