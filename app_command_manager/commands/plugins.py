"""
Plugin Functions
Exposes sync, reload and cooldown checks to the host's scripting surface
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from app_command_manager.utils.error_handler import get_error_handler
from app_command_manager.utils.logger import get_logger
from app_command_manager.utils.validation import ValidationUtils

SYNC_FUNCTION = "$applicationCommandSync"
RELOAD_FUNCTION = "$applicationCommandReload"
COOLDOWN_FUNCTION = "$applicationCommandCooldown"

logger = get_logger("Plugins")


class FunctionResult:
    """Outcome of a plugin function call in the host's convention."""

    def __init__(self, ok: bool, result: Any = None, error: Optional[str] = None):
        self.ok = ok
        self.result = result
        self.error = error

    @classmethod
    def success(cls, result: Any = None) -> "FunctionResult":
        return cls(True, result=result)

    @classmethod
    def failure(cls, error: str) -> "FunctionResult":
        return cls(False, error=error)

    def __repr__(self) -> str:
        if self.ok:
            return f"FunctionResult(ok=True, result={self.result!r})"
        return f"FunctionResult(ok=False, error={self.error!r})"


# Plugin handler type alias
FunctionHandler = Callable[[List[str]], Awaitable[FunctionResult]]


class FunctionRegistry:
    """Minimal function sink: name to async handler taking split arguments."""

    def __init__(self):
        self.functions: Dict[str, FunctionHandler] = {}

    def create_function(self, name: str, handler: FunctionHandler) -> "FunctionRegistry":
        self.functions[name] = handler
        logger.debug(f"Registered function: {name}")
        return self

    def has(self, name: str) -> bool:
        return name in self.functions

    async def call(self, name: str, args: Optional[List[str]] = None) -> FunctionResult:
        handler = self.functions.get(name)
        if handler is None:
            return FunctionResult.failure(f"Unknown function: {name}")
        return await handler(list(args or []))


def register_functions(manager: Any, sink: Any) -> None:
    """
    Bind the manager's operations to a host function sink.

    Args:
        manager: ApplicationCommandManager instance
        sink: Any object exposing ``create_function(name, handler)``
    """
    error_handler = get_error_handler()

    async def sync_function(args: List[str]) -> FunctionResult:
        if manager.command_size() == 0:
            return FunctionResult.failure("Cannot sync empty commands!")

        guild_ids = [ValidationUtils.sanitize_input(arg) for arg in args]
        guild_ids = [guild_id for guild_id in guild_ids if guild_id]

        try:
            # No arguments publishes globally, never to the configured defaults
            await manager.sync(guild_ids)
        except Exception as e:
            message = error_handler.handle_exception(e, SYNC_FUNCTION)
            return FunctionResult.failure(f"Failed to sync commands: {message}")

        return FunctionResult.success()

    async def reload_function(args: List[str]) -> FunctionResult:
        if manager.directory is None:
            return FunctionResult.failure("Cannot find a specification directory!")

        try:
            await manager.reload()
        except Exception as e:
            error_handler.handle_exception(e, RELOAD_FUNCTION)
            return FunctionResult.success(False)

        return FunctionResult.success(True)

    async def cooldown_function(args: List[str]) -> FunctionResult:
        command_name = ValidationUtils.sanitize_input(args[0]) if len(args) > 0 else ""
        user_id = ValidationUtils.sanitize_input(args[1]) if len(args) > 1 else ""

        if not command_name or not user_id:
            return FunctionResult.failure("Missing required parameters!")

        on_cooldown = manager.try_acquire(command_name, user_id)
        remaining = manager.get_cooldown_time(command_name, user_id)

        return FunctionResult.success(remaining if on_cooldown else 0)

    sink.create_function(SYNC_FUNCTION, sync_function)
    sink.create_function(RELOAD_FUNCTION, reload_function)
    sink.create_function(COOLDOWN_FUNCTION, cooldown_function)
