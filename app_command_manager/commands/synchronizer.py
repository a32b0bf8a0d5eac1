"""
Command Synchronizer
Publishes the registry's command set to the global scope or to guilds
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union

from app_command_manager.commands.command_registry import CommandRegistry
from app_command_manager.commands.descriptor import CommandDescriptor
from app_command_manager.utils.errors import NotReadyError, SyncError
from app_command_manager.utils.logger import LoggerMixin
from app_command_manager.utils.validation import ValidationUtils

GLOBAL_SCOPE = "global"
DESTINATION_SCOPE = "destinations"


class SyncReport:
    """Per-destination outcome of one sync() call."""

    def __init__(self, scope: str, command_count: int):
        self.scope = scope
        self.command_count = command_count
        self.succeeded: List[str] = []
        self.failed: Dict[str, str] = {}

    @property
    def ok(self) -> bool:
        return not self.failed

    def __repr__(self) -> str:
        return (
            f"SyncReport(scope={self.scope!r}, commands={self.command_count}, "
            f"succeeded={self.succeeded}, failed={list(self.failed)})"
        )


def _unique_ids(destination_ids: Sequence[Union[str, int]]) -> List[str]:
    seen: Dict[str, None] = {}
    for destination_id in destination_ids:
        seen.setdefault(str(destination_id).strip(), None)
    return list(seen)


class CommandSynchronizer(LoggerMixin):
    """
    Replaces remote command sets with the registry snapshot.

    Every call submits the full set (replace semantics), so syncing an
    unchanged registry again leaves the remote side as it was.
    """

    def __init__(self, client: Any, registry: CommandRegistry, validate_on_sync: bool = False):
        """
        Create CommandSynchronizer instance.

        Args:
            client: Remote command client (see bot.client.DiscordCommandClient)
            registry: Registry providing the desired command set
            validate_on_sync: Re-validate every descriptor before publishing
        """
        super().__init__("Sync")
        self.client = client
        self.registry = registry
        self.validate_on_sync = validate_on_sync

    async def sync(
        self,
        destination_ids: Optional[Sequence[Union[str, int]]] = None,
        raise_on_failure: bool = True,
    ) -> SyncReport:
        """
        Sync all application commands with the remote API.

        Args:
            destination_ids: Guild IDs to publish to; global scope when empty
            raise_on_failure: Raise an aggregate SyncError if any guild failed

        Returns:
            SyncReport with successes and failures by destination

        Raises:
            NotReadyError: The client is not connected
            SyncError: The global call failed, validation failed, or (with
                raise_on_failure) at least one destination failed
        """
        if not self.client.is_ready():
            raise NotReadyError("Cannot sync commands before the client is ready")

        descriptors = self.registry.list()
        if self.validate_on_sync:
            self._revalidate(descriptors)

        payloads = [descriptor.to_payload() for descriptor in descriptors]

        if not destination_ids:
            return await self._sync_global(payloads)

        report = await self._sync_destinations(_unique_ids(destination_ids), payloads)

        if report.failed and raise_on_failure:
            details = ", ".join(f"{d} ({reason})" for d, reason in report.failed.items())
            raise SyncError(
                f"Failed to sync {len(report.failed)} of "
                f"{len(report.failed) + len(report.succeeded)} guild(s): {details}",
                report=report,
            )
        return report

    def _revalidate(self, descriptors: List[CommandDescriptor]) -> None:
        for descriptor in descriptors:
            result = ValidationUtils.validate_command(descriptor.to_raw())
            if not result:
                raise SyncError(
                    f"Command '{descriptor.name}' failed validation: {result.error}"
                ) from result.to_error()

    async def _sync_global(self, payloads: List[Dict[str, Any]]) -> SyncReport:
        report = SyncReport(GLOBAL_SCOPE, len(payloads))

        try:
            await self.client.set_global_commands(payloads)
        except Exception as e:
            self.error(f"Global sync failed: {e}")
            raise SyncError(f"Failed to sync global commands: {e}") from e

        report.succeeded.append(GLOBAL_SCOPE)
        self.success(f"Synced {len(payloads)} global command(s)")
        return report

    async def _sync_destinations(self, destination_ids: List[str], payloads: List[Dict[str, Any]]) -> SyncReport:
        report = SyncReport(DESTINATION_SCOPE, len(payloads))

        results = await asyncio.gather(
            *(self._sync_destination(destination_id, payloads) for destination_id in destination_ids),
            return_exceptions=True,
        )

        for destination_id, result in zip(destination_ids, results):
            if isinstance(result, Exception):
                report.failed[destination_id] = str(result)
                self.error(f"Guild {destination_id} sync failed: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                report.succeeded.append(destination_id)

        if report.succeeded:
            self.success(f"Synced {len(payloads)} command(s) to {len(report.succeeded)} guild(s)")
        return report

    async def _sync_destination(self, destination_id: str, payloads: List[Dict[str, Any]]) -> None:
        check = ValidationUtils.validate_guild_id(destination_id)
        if not check:
            raise SyncError(f"Invalid Guild ID: {destination_id}", destination_id=destination_id)

        destination = await self.client.resolve_destination(check.sanitized)
        if destination is None:
            raise SyncError(f"Unknown Guild ID: {destination_id}", destination_id=destination_id)

        await self.client.set_destination_commands(destination, payloads)
