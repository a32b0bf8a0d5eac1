"""
Discord client setup using discord.py.
"""

import asyncio
import signal
from typing import Any, Dict, List, Optional

import discord
from discord.abc import Snowflake

from app_command_manager.bot.config import ManagerConfig, config
from app_command_manager.commands.plugins import FunctionRegistry
from app_command_manager.utils.errors import CommandManagerError, SyncError
from app_command_manager.utils.logger import get_logger
from app_command_manager.utils.summary import format_duration

logger = get_logger("Client")


class DiscordCommandClient:
    """Remote command capability backed by a discord.py client."""

    def __init__(self, client: discord.Client):
        self.client = client

    def is_ready(self) -> bool:
        return self.client.is_ready()

    def _application_id(self) -> int:
        application_id = self.client.application_id
        if application_id is None:
            raise SyncError("Bot application not found")
        return application_id

    async def set_global_commands(self, payloads: List[Dict[str, Any]]) -> None:
        """Replace the global command set."""
        await self.client.http.bulk_upsert_global_commands(self._application_id(), payloads)

    async def resolve_destination(self, destination_id: str) -> Optional[Snowflake]:
        """
        Resolve a guild from cache, falling back to the API.

        Returns:
            Guild or None if it does not exist
        """
        guild = self.client.get_guild(int(destination_id))
        if guild is not None:
            return guild

        try:
            return await self.client.fetch_guild(int(destination_id))
        except discord.NotFound:
            return None

    async def set_destination_commands(self, destination: Snowflake, payloads: List[Dict[str, Any]]) -> None:
        """Replace one guild's command set."""
        await self.client.http.bulk_upsert_guild_commands(self._application_id(), destination.id, payloads)


class CommandBot(discord.Client):
    """
    Bot host that owns an ApplicationCommandManager.

    Invocations that pass the cooldown gate are dispatched as the
    ``application_command`` event; the host answers them by defining
    ``on_application_command(interaction)`` on a subclass or with
    ``@bot.event``.
    """

    def __init__(self, manager_config: Optional[ManagerConfig] = None):
        super().__init__(intents=discord.Intents.default())

        self.manager_config = manager_config or config
        self.functions = FunctionRegistry()

        # Created in setup_hook
        self.command_manager = None

    async def setup_hook(self):
        """Called when bot is starting up."""
        from app_command_manager.commands.manager import ApplicationCommandManager

        logger.info("Setting up command manager...")

        self.command_manager = ApplicationCommandManager(
            DiscordCommandClient(self),
            function_sink=self.functions,
            config=self.manager_config,
        )

        try:
            await self.command_manager.initialize()
        except CommandManagerError as e:
            logger.error(f"Initial command load failed: {e}")

    async def on_ready(self):
        """Called when bot is ready."""
        logger.info(f"Logged in as: {self.user}")

        if not self.manager_config.sync_on_ready or self.command_manager is None:
            return

        if self.command_manager.command_size() == 0:
            logger.warning("Skipping sync: no commands loaded")
            return

        try:
            await self.command_manager.sync()
        except CommandManagerError as e:
            logger.error(f"Sync on ready failed: {e}")

    async def on_interaction(self, interaction: discord.Interaction):
        """Gate application command invocations on their cooldown."""
        if interaction.type != discord.InteractionType.application_command:
            return
        if self.command_manager is None or not interaction.data:
            return

        name = interaction.data.get("name")
        user_id = str(interaction.user.id)

        if self.command_manager.try_acquire(name, user_id):
            remaining = self.command_manager.get_cooldown_time(name, user_id)
            await interaction.response.send_message(
                f"This command is on cooldown. Try again in {format_duration(remaining)}.",
                ephemeral=True,
            )
            return

        self.dispatch("application_command", interaction)


# Global bot instance
bot: Optional[CommandBot] = None


def create_bot(manager_config: Optional[ManagerConfig] = None) -> CommandBot:
    """Create and return bot instance."""
    global bot
    bot = CommandBot(manager_config)
    return bot


async def run_bot():
    """Run the bot."""
    global bot

    config.validate()

    bot = create_bot()

    def shutdown_handler(sig, frame):
        logger.info(f"Received {signal.Signals(sig).name}, shutting down...")
        asyncio.create_task(bot.close())

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    try:
        await bot.start(config.token)
    except Exception as e:
        logger.error(f"Bot error: {e}")
        raise
