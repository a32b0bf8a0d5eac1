"""
Command Loader
Discovers command files in a directory tree and fills the registry
"""

import asyncio
import importlib.util
import json
import os
import sys
import types
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Union

from app_command_manager.commands.command_registry import CommandRegistry
from app_command_manager.utils.errors import DiscoveryError
from app_command_manager.utils.logger import LoggerMixin
from app_command_manager.utils.validation import ValidationUtils

# File suffixes treated as command sources; everything else is skipped
SOURCE_SUFFIXES = (".py", ".json")

# Names a Python command file may export, checked in this order
EXPORT_NAMES = ("setup", "commands", "command")


class LoadFailure:
    """A command file or descriptor that could not be loaded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason

    def __repr__(self) -> str:
        return f"LoadFailure(path={str(self.path)!r}, reason={self.reason!r})"


class LoadReport:
    """Outcome of one load() call."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.commands: List[str] = []
        self.failures: List[LoadFailure] = []
        self.candidates = 0

    @property
    def loaded(self) -> int:
        return len(self.commands)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __repr__(self) -> str:
        return (
            f"LoadReport(directory={str(self.directory)!r}, "
            f"loaded={self.loaded}, failures={len(self.failures)})"
        )


class CommandSourceError(Exception):
    """A command file could not be read or exports nothing usable."""


def _as_list(exported: Any) -> List[Any]:
    if isinstance(exported, Mapping):
        return [exported]
    if isinstance(exported, (list, tuple)):
        return list(exported)
    return [exported]


def read_json_source(path: Path) -> List[Any]:
    """Read raw descriptor(s) from a JSON command file."""
    with open(path, encoding="utf-8") as fh:
        return _as_list(json.load(fh))


def read_python_source(path: Path) -> List[Any]:
    """
    Import a Python command file in isolation and collect its exports.

    The module must define ``setup()`` returning one raw descriptor or a
    list of them, or a module-level ``commands`` list, or a single
    ``command``.
    """
    module_name = f"_app_command_{path.stem}_{uuid.uuid4().hex[:8]}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise CommandSourceError("Cannot import command file")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)

        for export in EXPORT_NAMES:
            value = getattr(module, export, None)
            # "from discord.ext import commands" is an import, not an export
            if value is None or isinstance(value, types.ModuleType):
                continue
            if export == "setup":
                if not callable(value):
                    raise CommandSourceError("setup must be callable")
                value = value()
            return _as_list(value)
    finally:
        sys.modules.pop(module_name, None)

    raise CommandSourceError("No commands exported (define setup(), commands or command)")


def read_source(path: Path) -> List[Any]:
    """Read raw descriptors from any supported command file."""
    if path.suffix == ".json":
        return read_json_source(path)
    return read_python_source(path)


def _scan(directory: Path) -> List[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


class CommandLoader(LoggerMixin):
    """Walks a command directory and upserts every valid descriptor."""

    def __init__(self, registry: CommandRegistry, fail_on_empty: bool = True):
        """
        Create CommandLoader instance.

        Args:
            registry: Registry that receives accepted commands
            fail_on_empty: Raise when files exist but none yields a valid command
        """
        super().__init__("Loader")
        self.registry = registry
        self.fail_on_empty = fail_on_empty

    @staticmethod
    def resolve(directory: Union[str, Path], providing_cwd: bool = False) -> Path:
        """
        Resolve a command directory.

        Args:
            directory: Directory path
            providing_cwd: Use the path as given instead of joining it to the cwd

        Returns:
            Resolved path
        """
        path = Path(directory)
        if providing_cwd:
            return path
        return Path.cwd() / path

    async def load(self, directory: Union[str, Path], providing_cwd: bool = False) -> LoadReport:
        """
        Load all application commands inside a directory.

        Loading is additive: existing commands are kept and same-named ones
        are overwritten. Per-file problems are collected in the report.

        Args:
            directory: Command directory
            providing_cwd: Set to True if the path already includes its root

        Returns:
            LoadReport with accepted commands and failures

        Raises:
            DiscoveryError: Directory missing, unreadable, or has nothing to load
        """
        path = self.resolve(directory, providing_cwd)

        if not await asyncio.to_thread(path.is_dir):
            reason = "Command directory is not a directory" if path.exists() else "Command directory does not exist"
            raise DiscoveryError(path, reason)

        try:
            entries = await asyncio.to_thread(_scan, path)
        except OSError as e:
            raise DiscoveryError(path, f"Cannot read command directory ({e.strerror or e})") from e

        if not entries:
            raise DiscoveryError(path, "Command directory is empty")

        report = LoadReport(path)
        await self._walk(entries, report)

        for failure in report.failures:
            self.error(f"Error loading command from {failure.path}: {failure.reason}")

        if report.candidates == 0:
            raise DiscoveryError(path, "No command files to load", report=report)

        if report.loaded == 0:
            if self.fail_on_empty:
                raise DiscoveryError(path, "No valid commands found", report=report)
            self.warning(f"No valid commands found in {path}")

        self.registry.set_directory(path, providing_cwd)
        self.info(f"Loaded {report.loaded} command(s) from {path}")
        return report

    async def _walk(self, entries: List[os.DirEntry], report: LoadReport) -> None:
        for entry in entries:
            entry_path = Path(entry.path)

            # __init__.py, __pycache__ and friends are never command sources
            if entry.name.startswith("__"):
                continue

            if entry.is_dir(follow_symlinks=False):
                try:
                    children = await asyncio.to_thread(_scan, entry_path)
                except OSError as e:
                    report.failures.append(LoadFailure(entry_path, f"Cannot read directory ({e.strerror or e})"))
                    continue
                await self._walk(children, report)
                continue

            if entry_path.suffix not in SOURCE_SUFFIXES:
                continue

            report.candidates += 1
            await self._load_file(entry_path, report)

    async def _load_file(self, path: Path, report: LoadReport) -> None:
        try:
            exported = await asyncio.to_thread(read_source, path)
        except Exception as e:
            report.failures.append(LoadFailure(path, f"{type(e).__name__}: {e}"))
            return

        for raw in exported:
            result = ValidationUtils.validate_command(raw)
            if not result:
                report.failures.append(LoadFailure(path, result.error))
                continue

            descriptor = result.value
            self.registry.upsert(descriptor)
            report.commands.append(descriptor.name)
