"""
Command Descriptor
Canonical in-memory representation of one application command
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional


class CommandType(IntEnum):
    """Application command kinds understood by the platform."""

    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class CommandOption:
    """A single option (argument) of a chat-input command."""

    def __init__(self, name: str, description: str, extra: Optional[Dict[str, Any]] = None):
        self.name = name
        self.description = description
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload["name"] = self.name
        payload["description"] = self.description
        return payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandOption):
            return NotImplemented
        return self.to_payload() == other.to_payload()

    def __repr__(self) -> str:
        return f"CommandOption(name={self.name!r})"


class CommandDescriptor:
    """Validated definition of a remotely registrable command."""

    def __init__(
        self,
        name: str,
        description: str,
        options: Optional[List[CommandOption]] = None,
        type: CommandType = CommandType.CHAT_INPUT,
        cooldown: Optional[int] = None,
        guild_only: bool = False,
        permissions: Optional[List[int]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        self.description = description
        self.options = options or []
        self.type = CommandType(type)
        self.cooldown = cooldown
        self.guild_only = guild_only
        self.permissions = permissions
        self.extra = extra or {}

    @property
    def cooldown_ms(self) -> int:
        """Configured cooldown in milliseconds, 0 when unthrottled."""
        return self.cooldown or 0

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the JSON body submitted to the application command API.

        Returns:
            Dict without the local-only fields (cooldown, guild_only)
        """
        payload = dict(self.extra)
        payload["name"] = self.name
        payload["type"] = int(self.type)

        # Context menu commands carry no description or options on the wire
        if self.type == CommandType.CHAT_INPUT:
            payload["description"] = self.description
            if self.options:
                payload["options"] = [option.to_payload() for option in self.options]

        if self.permissions:
            bits = 0
            for permission in self.permissions:
                bits |= int(permission)
            payload["default_member_permissions"] = str(bits)

        if self.guild_only:
            payload["dm_permission"] = False

        return payload

    def to_raw(self) -> Dict[str, Any]:
        """Rebuild a raw descriptor suitable for re-validation."""
        data = dict(self.extra)
        data["name"] = self.name
        data["description"] = self.description
        if self.options:
            data["options"] = [option.to_payload() for option in self.options]
        return {
            "data": data,
            "type": int(self.type),
            "cooldown": self.cooldown,
            "guild_only": self.guild_only,
            "permissions": self.permissions,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandDescriptor):
            return NotImplemented
        return self.to_raw() == other.to_raw()

    def __repr__(self) -> str:
        return f"CommandDescriptor(name={self.name!r}, type={self.type.name})"
