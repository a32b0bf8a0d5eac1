"""
Configuration management for the application command manager.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from app_command_manager.utils.errors import ConfigurationError

# Load environment variables from .env file in the working directory
load_dotenv(dotenv_path=Path.cwd() / ".env")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> Tuple[str, ...]:
    value = os.getenv(name, "")
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class ManagerConfig:
    """Application command manager settings."""

    # Directory auto-loaded at startup
    path: Optional[str] = None
    providing_cwd: bool = False

    # Default sync targets (global scope when empty)
    destination_ids: Tuple[str, ...] = field(default_factory=tuple)

    # Presentation and policy
    show_summary_table: bool = False
    validate_on_sync: bool = False
    fail_on_empty_load: bool = True

    # Bot host
    token: str = ""
    sync_on_ready: bool = False
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ManagerConfig":
        """Load configuration from environment variables."""
        return cls(
            path=os.getenv("COMMANDS_PATH") or None,
            providing_cwd=_env_flag("COMMANDS_PROVIDING_CWD", False),
            destination_ids=_env_list("SYNC_GUILD_IDS"),
            show_summary_table=_env_flag("SHOW_SUMMARY_TABLE", False),
            validate_on_sync=_env_flag("VALIDATE_ON_SYNC", False),
            fail_on_empty_load=_env_flag("FAIL_ON_EMPTY_LOAD", True),
            token=os.getenv("DISCORD_TOKEN", ""),
            sync_on_ready=_env_flag("SYNC_ON_READY", False),
            debug=_env_flag("DEBUG", False),
        )

    def validate(self) -> None:
        """Validate configuration required to run the bot."""
        if not self.token:
            raise ConfigurationError("DISCORD_TOKEN is required")


# Global config instance
config = ManagerConfig.from_env()
