"""
Application Command Manager
Facade tying discovery, registry, sync and cooldowns together
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from app_command_manager.bot.config import ManagerConfig
from app_command_manager.commands.command_registry import CommandRegistry
from app_command_manager.commands.cooldowns import CooldownTracker
from app_command_manager.commands.loader import CommandLoader, LoadReport
from app_command_manager.commands.plugins import register_functions
from app_command_manager.commands.synchronizer import CommandSynchronizer, SyncReport
from app_command_manager.utils.errors import ConfigurationError, DiscoveryError, SyncError
from app_command_manager.utils.logger import LoggerMixin
from app_command_manager.utils.summary import commands_table, load_table, print_table, sync_table


class ApplicationCommandManager(LoggerMixin):
    """
    Loads application commands from disk, publishes them and tracks cooldowns.

    Collaborators are injected: the remote client, an optional function sink
    that receives the plugin functions, and the configuration. load(),
    reload() and sync() are serialized on an internal lock.
    """

    def __init__(
        self,
        client: Any,
        function_sink: Any = None,
        config: Optional[ManagerConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Create ApplicationCommandManager instance.

        Args:
            client: Remote command client (is_ready, set_global_commands, ...)
            function_sink: Host registration sink exposing create_function()
            config: Manager configuration (defaults when omitted)
            clock: Millisecond clock for cooldowns

        Raises:
            ConfigurationError: No client supplied
        """
        if client is None:
            raise ConfigurationError("A client instance is required")

        super().__init__("ApplicationCommandManager")
        self.client = client
        self.config = config or ManagerConfig()

        self.registry = CommandRegistry()
        self.loader = CommandLoader(self.registry, fail_on_empty=self.config.fail_on_empty_load)
        self.synchronizer = CommandSynchronizer(
            client,
            self.registry,
            validate_on_sync=self.config.validate_on_sync,
        )
        self.cooldowns = CooldownTracker(self.registry, clock=clock)

        self.last_load: Optional[LoadReport] = None
        self.last_sync: Optional[SyncReport] = None
        self._lock = asyncio.Lock()

        if function_sink is not None:
            register_functions(self, function_sink)

    async def initialize(self) -> Optional[LoadReport]:
        """Load the configured command directory, if any."""
        if not self.config.path:
            return None
        return await self.load(self.config.path, self.config.providing_cwd)

    def clear_commands(self) -> "ApplicationCommandManager":
        """
        Clear all cached commands.

        Returns:
            Self for chaining
        """
        self.registry.clear()
        return self

    def command_size(self) -> int:
        """Number of cached commands."""
        return self.registry.size()

    def get_commands(self) -> List[Dict[str, Any]]:
        """API payloads of all registered commands."""
        return [descriptor.to_payload() for descriptor in self.registry.list()]

    async def load(self, directory: Union[str, Path], providing_cwd: bool = False) -> LoadReport:
        """
        Load all application commands inside a directory.

        Args:
            directory: Application commands directory
            providing_cwd: Set to True if the path provides its own root

        Raises:
            DiscoveryError: If the directory is invalid or has nothing to load
        """
        async with self._lock:
            try:
                report = await self.loader.load(directory, providing_cwd)
            except DiscoveryError as e:
                if e.report is not None:
                    self.last_load = e.report
                    if self.config.show_summary_table:
                        print_table(load_table(e.report))
                raise

        self.last_load = report
        if self.config.show_summary_table:
            print_table(load_table(report))
            print_table(commands_table(self.registry.list()))
        return report

    async def reload(self) -> LoadReport:
        """
        Re-run the last loaded directory.

        Existing commands are not cleared first; call clear_commands() before
        reloading to drop commands whose files were removed.

        Raises:
            DiscoveryError: Nothing was loaded yet, or the directory failed
        """
        directory = self.registry.last_directory
        if directory is None:
            raise DiscoveryError(None, "Cannot find a specification directory")
        # The recorded path is already resolved
        return await self.load(directory, providing_cwd=True)

    async def sync(self, destination_ids: Optional[Sequence[Union[str, int]]] = None) -> SyncReport:
        """
        Sync all application commands with the remote API.

        Args:
            destination_ids: Guild IDs; configured defaults when None, global scope when empty

        Raises:
            NotReadyError: The client is not ready
            SyncError: Global sync failed or any guild failed
        """
        if destination_ids is None:
            destination_ids = list(self.config.destination_ids)

        async with self._lock:
            try:
                report = await self.synchronizer.sync(destination_ids)
            except SyncError as e:
                if e.report is not None:
                    self.last_sync = e.report
                    if self.config.show_summary_table:
                        print_table(sync_table(e.report))
                raise

        self.last_sync = report
        if self.config.show_summary_table:
            print_table(sync_table(report))
        return report

    def try_acquire(self, command_name: str, user_id: str) -> bool:
        """
        Check and arm the cooldown for one invocation attempt.

        Returns:
            True if the user was already on cooldown (nothing changed);
            False if they were free, in which case a new window started
        """
        return self.cooldowns.try_acquire(command_name, user_id)

    def is_on_cooldown(self, command_name: str, user_id: str) -> bool:
        """
        Check if a command is on cooldown.

        Not a pure query: a False result arms the next cooldown window.
        """
        return self.cooldowns.is_on_cooldown(command_name, user_id)

    def get_cooldown_time(self, command_name: str, user_id: str) -> int:
        """Remaining cooldown time in milliseconds."""
        return self.cooldowns.remaining(command_name, user_id)

    @property
    def directory(self) -> Optional[Path]:
        """Command specifications directory."""
        return self.registry.last_directory

    @property
    def cwd(self) -> bool:
        """True if the directory was loaded with providing_cwd."""
        return self.registry.providing_cwd
