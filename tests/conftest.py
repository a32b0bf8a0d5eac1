"""Shared fixtures and test doubles."""

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from app_command_manager.bot.config import ManagerConfig
from app_command_manager.commands.manager import ApplicationCommandManager
from app_command_manager.commands.plugins import FunctionRegistry

GUILD_A = "111111111111111111"
GUILD_B = "222222222222222222"
GUILD_C = "333333333333333333"


class FakeCommandClient:
    """Remote command client double recording every call."""

    def __init__(self, ready=True, guilds=(), failing=(), fail_global=False):
        self.ready = ready
        self.guilds = set(guilds)
        self.failing = set(failing)
        self.fail_global = fail_global
        self.global_calls: List[List[Dict[str, Any]]] = []
        self.destination_calls: Dict[str, List[Dict[str, Any]]] = {}
        self.resolved: List[str] = []

    def is_ready(self) -> bool:
        return self.ready

    async def set_global_commands(self, payloads):
        if self.fail_global:
            raise RuntimeError("503 Service Unavailable")
        self.global_calls.append(payloads)

    async def resolve_destination(self, destination_id):
        self.resolved.append(destination_id)
        if destination_id not in self.guilds:
            return None
        return SimpleNamespace(id=int(destination_id))

    async def set_destination_commands(self, destination, payloads):
        guild_id = str(destination.id)
        if guild_id in self.failing:
            raise RuntimeError("403 Forbidden (error code: 50001): Missing Access")
        self.destination_calls[guild_id] = payloads


class Clock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def command(name="ping", description="Replies with pong", **extra):
    """Build a raw descriptor in the {"data": ..., ...} form."""
    raw = {"data": {"name": name, "description": description}}
    raw.update(extra)
    return raw


def write_json(directory: Path, filename: str, payload: Any) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_py(directory: Path, filename: str, source: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(source, encoding="utf-8")
    return path


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def client():
    return FakeCommandClient(guilds={GUILD_A, GUILD_B, GUILD_C})


@pytest.fixture
def sink():
    return FunctionRegistry()


@pytest.fixture
def manager(client, sink, clock):
    return ApplicationCommandManager(client, function_sink=sink, config=ManagerConfig(), clock=clock)


@pytest.fixture
def commands_dir(tmp_path):
    """A directory with two valid JSON commands and one valid Python file."""
    root = tmp_path / "commands"
    write_json(root, "ping.json", command("ping", cooldown=5000))
    write_json(root / "util", "echo.json", command("echo", "Echo a message"))
    write_py(
        root / "util",
        "info.py",
        "def setup():\n"
        "    return {'data': {'name': 'info', 'description': 'Bot info'}}\n",
    )
    return root
