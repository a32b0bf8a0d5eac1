"""Tests for the command registry and descriptor payloads."""

from pathlib import Path

from app_command_manager.commands.command_registry import CommandRegistry
from app_command_manager.commands.descriptor import CommandDescriptor, CommandOption, CommandType
from app_command_manager.utils.validation import ValidationUtils

from conftest import command


def descriptor(name="ping", description="Replies with pong", **kwargs):
    return CommandDescriptor(name=name, description=description, **kwargs)


class TestRegistry:
    def test_starts_empty(self):
        registry = CommandRegistry()
        assert registry.size() == 0
        assert registry.list() == []
        assert registry.last_directory is None
        assert registry.providing_cwd is False

    def test_upsert_new_and_overwrite(self):
        registry = CommandRegistry()
        assert registry.upsert(descriptor()) is False
        assert registry.size() == 1

        replacement = descriptor(description="Second version")
        assert registry.upsert(replacement) is True
        assert registry.size() == 1
        assert registry.get("ping").description == "Second version"

    def test_clear_is_chainable(self):
        registry = CommandRegistry()
        registry.upsert(descriptor())
        assert registry.clear() is registry
        assert len(registry) == 0

    def test_list_is_snapshot(self):
        registry = CommandRegistry()
        registry.upsert(descriptor("a"))
        snapshot = registry.list()
        registry.upsert(descriptor("b"))
        assert [d.name for d in snapshot] == ["a"]
        assert registry.names() == ["a", "b"]

    def test_has_and_contains(self):
        registry = CommandRegistry()
        registry.upsert(descriptor())
        assert registry.has("ping")
        assert "ping" in registry
        assert registry.get("missing") is None

    def test_set_directory(self, tmp_path):
        registry = CommandRegistry()
        registry.set_directory(tmp_path, True)
        assert registry.last_directory == Path(tmp_path)
        assert registry.providing_cwd is True


class TestDescriptorPayload:
    def test_chat_input_payload(self):
        payload = descriptor(
            options=[CommandOption("target", "Who to ping", {"type": 6, "required": True})],
            cooldown=5000,
            extra={"nsfw": False},
        ).to_payload()

        assert payload == {
            "name": "ping",
            "type": 1,
            "description": "Replies with pong",
            "options": [{"name": "target", "description": "Who to ping", "type": 6, "required": True}],
            "nsfw": False,
        }

    def test_local_fields_stay_local(self):
        payload = descriptor(cooldown=1000, guild_only=True, permissions=[0x8, 0x20]).to_payload()
        assert "cooldown" not in payload
        assert "guild_only" not in payload
        assert "permissions" not in payload
        assert payload["default_member_permissions"] == str(0x28)
        assert payload["dm_permission"] is False

    def test_context_menu_has_no_description(self):
        payload = descriptor("Report", type=CommandType.MESSAGE).to_payload()
        assert payload == {"name": "Report", "type": 3}

    def test_to_raw_revalidates_to_equal_descriptor(self):
        original = ValidationUtils.validate_command(
            command(cooldown=250, permissions=[8], guild_only=True)
        ).value
        again = ValidationUtils.validate_command(original.to_raw()).value
        assert again == original
