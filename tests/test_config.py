"""Tests for environment configuration."""

import pytest

from app_command_manager.bot.config import ManagerConfig
from app_command_manager.utils.errors import ConfigurationError

ENV_KEYS = (
    "DISCORD_TOKEN",
    "COMMANDS_PATH",
    "COMMANDS_PROVIDING_CWD",
    "SYNC_GUILD_IDS",
    "SHOW_SUMMARY_TABLE",
    "VALIDATE_ON_SYNC",
    "FAIL_ON_EMPTY_LOAD",
    "SYNC_ON_READY",
    "DEBUG",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestManagerConfig:
    def test_defaults(self, clean_env):
        config = ManagerConfig.from_env()
        assert config.path is None
        assert config.destination_ids == ()
        assert config.show_summary_table is False
        assert config.validate_on_sync is False
        assert config.fail_on_empty_load is True

    def test_from_env(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "token")
        clean_env.setenv("COMMANDS_PATH", "commands")
        clean_env.setenv("SYNC_GUILD_IDS", "111111111111111111, 222222222222222222,,")
        clean_env.setenv("SHOW_SUMMARY_TABLE", "true")
        clean_env.setenv("VALIDATE_ON_SYNC", "1")
        clean_env.setenv("FAIL_ON_EMPTY_LOAD", "no")
        clean_env.setenv("DEBUG", "TRUE")

        config = ManagerConfig.from_env()

        assert config.token == "token"
        assert config.path == "commands"
        assert config.destination_ids == ("111111111111111111", "222222222222222222")
        assert config.show_summary_table is True
        assert config.validate_on_sync is True
        assert config.fail_on_empty_load is False
        assert config.debug is True

    def test_validate_requires_token(self):
        with pytest.raises(ConfigurationError, match="DISCORD_TOKEN"):
            ManagerConfig().validate()
        ManagerConfig(token="abc").validate()

    def test_frozen(self):
        config = ManagerConfig()
        with pytest.raises(Exception):
            config.path = "other"
