"""
Cooldown Tracker
Per-(command, user) throttle state held in process memory
"""

import math
import time
from typing import Callable, Dict, Optional

from app_command_manager.commands.command_registry import CommandRegistry
from app_command_manager.utils.logger import get_logger


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class CooldownTracker:
    """
    Tracks cooldown expiry per command and user.

    State is created lazily for commands that have a cooldown configured and
    is never evicted automatically; call clear_expired() to trim it.
    """

    def __init__(self, registry: CommandRegistry, clock: Optional[Callable[[], float]] = None):
        """
        Create CooldownTracker instance.

        Args:
            registry: Registry used to look up each command's cooldown
            clock: Returns the current time in milliseconds
        """
        self.logger = get_logger("Cooldowns")
        self.registry = registry
        self.clock = clock or _now_ms
        self.cooldowns: Dict[str, Dict[str, float]] = {}

    def get_command_cooldown(self, command: str) -> int:
        """Configured cooldown of a command in milliseconds (0 if none)."""
        descriptor = self.registry.get(command)
        return descriptor.cooldown_ms if descriptor else 0

    def try_acquire(self, command: str, user_id: str) -> bool:
        """
        Check the cooldown and, when the user is free, start a new window.

        A call that finds the user still cooling down leaves the expiry
        untouched. A call that finds the user free consumes the window, so
        call this once per actual invocation attempt.

        Args:
            command: Command name
            user_id: User ID

        Returns:
            True if the user was already on cooldown
        """
        amount = self.get_command_cooldown(command)
        if not amount:
            return False

        now = self.clock()
        timestamps = self.cooldowns.get(command)
        expires_at = timestamps.get(user_id, 0) if timestamps else 0

        if now < expires_at:
            return True

        if timestamps is None:
            self.cooldowns[command] = {user_id: now + amount}
        else:
            timestamps[user_id] = now + amount

        return False

    def is_on_cooldown(self, command: str, user_id: str) -> bool:
        """
        Alias of try_acquire(); not a pure query.

        A result of False means a new cooldown window was just armed.
        """
        return self.try_acquire(command, user_id)

    def remaining(self, command: str, user_id: str) -> int:
        """
        Get remaining cooldown time in milliseconds without changing state.

        Args:
            command: Command name
            user_id: User ID

        Returns:
            Remaining milliseconds (0 if not on cooldown)
        """
        timestamps = self.cooldowns.get(command)
        if not timestamps:
            return 0

        expires_at = timestamps.get(user_id)
        if not expires_at:
            return 0

        # Rounded up so a user still inside the window never reads 0
        return max(0, math.ceil(expires_at - self.clock()))

    def clear_cooldown(self, command: str, user_id: str) -> bool:
        """
        Clear cooldown for user and command.

        Returns:
            True if cleared
        """
        timestamps = self.cooldowns.get(command)
        if not timestamps or user_id not in timestamps:
            return False

        del timestamps[user_id]
        if not timestamps:
            del self.cooldowns[command]
        return True

    def clear_user_cooldowns(self, user_id: str) -> int:
        """
        Clear all cooldowns for a user.

        Returns:
            Number of cleared cooldowns
        """
        cleared = 0
        for command in list(self.cooldowns):
            if self.clear_cooldown(command, user_id):
                cleared += 1
        return cleared

    def clear_expired(self) -> int:
        """
        Drop every entry whose window has elapsed.

        Returns:
            Number of cleared cooldowns
        """
        now = self.clock()
        cleared = 0

        for command, timestamps in list(self.cooldowns.items()):
            for user_id, expires_at in list(timestamps.items()):
                if expires_at <= now:
                    del timestamps[user_id]
                    cleared += 1
            if not timestamps:
                del self.cooldowns[command]

        if cleared:
            self.logger.debug(f"Cleared {cleared} expired cooldown(s)")
        return cleared

    def tracked_pairs(self) -> int:
        """Number of (command, user) entries currently held."""
        return sum(len(timestamps) for timestamps in self.cooldowns.values())

    def reset(self) -> None:
        """Forget all cooldown state."""
        self.cooldowns.clear()
