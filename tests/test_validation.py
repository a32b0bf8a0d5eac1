"""Tests for command descriptor validation."""

import pytest

from app_command_manager.commands.descriptor import CommandDescriptor, CommandType
from app_command_manager.utils.errors import ValidationError
from app_command_manager.utils.validation import INVALID_STRUCTURE, ValidationUtils

from conftest import command


def options(count):
    return [{"name": f"opt{i}", "description": f"Option {i}", "type": 3} for i in range(count)]


class TestAcceptance:
    def test_minimal_command(self):
        result = ValidationUtils.validate_command(command())
        assert result.valid
        assert isinstance(result.value, CommandDescriptor)
        assert result.value.name == "ping"
        assert result.value.type == CommandType.CHAT_INPUT
        assert result.value.cooldown_ms == 0

    def test_boundary_lengths(self):
        result = ValidationUtils.validate_command(command("n" * 32, "d" * 100))
        assert result.valid

    def test_twenty_five_options(self):
        raw = command()
        raw["data"]["options"] = options(25)
        result = ValidationUtils.validate_command(raw)
        assert result.valid
        assert len(result.value.options) == 25
        assert result.value.options[0].extra == {"type": 3}

    def test_flat_form(self):
        result = ValidationUtils.validate_command({"name": "flat", "description": "Flat body", "cooldown": 10})
        assert result.valid
        assert result.value.cooldown == 10

    def test_top_level_fields_override_body(self):
        raw = command(cooldown=3000, type=2, guild_only=True, permissions=[8])
        raw["data"]["cooldown"] = 1
        result = ValidationUtils.validate_command(raw)
        assert result.valid
        descriptor = result.value
        assert descriptor.cooldown == 3000
        assert descriptor.type == CommandType.USER
        assert descriptor.guild_only is True
        assert descriptor.permissions == [8]

    def test_to_dict_body(self):
        class Builder:
            def to_dict(self):
                return {"name": "built", "description": "From a builder"}

        result = ValidationUtils.validate_command({"data": Builder(), "cooldown": 100})
        assert result.valid
        assert result.value.name == "built"

    def test_unknown_fields_pass_through(self):
        raw = command()
        raw["data"]["nsfw"] = False
        raw["data"]["name_localizations"] = {"de": "ping"}
        result = ValidationUtils.validate_command(raw)
        assert result.value.extra == {"nsfw": False, "name_localizations": {"de": "ping"}}


class TestRejection:
    @pytest.mark.parametrize("raw", [None, "ping", 42, [], {"data": None}, {"data": {"description": "x"}}, {}])
    def test_missing_structure(self, raw):
        result = ValidationUtils.validate_command(raw)
        assert not result.valid
        assert result.error == INVALID_STRUCTURE
        assert result.field is None

    def test_body_without_to_dict(self):
        result = ValidationUtils.validate_command({"data": object()})
        assert result.error == INVALID_STRUCTURE

    def test_to_dict_raising(self):
        class Broken:
            def to_dict(self):
                raise ValueError("nope")

        result = ValidationUtils.validate_command({"data": Broken()})
        assert result.error == INVALID_STRUCTURE

    @pytest.mark.parametrize("name", ["", "n" * 33, 123])
    def test_bad_name(self, name):
        result = ValidationUtils.validate_command(command(name))
        assert not result.valid
        assert result.field == "name"
        assert "1-32" in result.error

    @pytest.mark.parametrize("description", ["", "d" * 101, None, 5])
    def test_bad_description(self, description):
        result = ValidationUtils.validate_command(command(description=description))
        assert not result.valid
        assert result.field == "description"
        assert "1-100" in result.error

    def test_too_many_options(self):
        raw = command()
        raw["data"]["options"] = options(26)
        result = ValidationUtils.validate_command(raw)
        assert result.field == "options"
        assert result.error == "Too many options (26/25)"

    def test_option_without_name(self):
        raw = command()
        raw["data"]["options"] = [{"name": "a", "description": "A"}, {"description": "B"}]
        result = ValidationUtils.validate_command(raw)
        assert result.error == "Option #2 is missing a name"

    def test_option_without_description(self):
        raw = command()
        raw["data"]["options"] = [{"name": "target", "description": ""}]
        result = ValidationUtils.validate_command(raw)
        assert result.error == "Option 'target' is missing a description"

    def test_options_not_a_list(self):
        raw = command()
        raw["data"]["options"] = {"name": "a"}
        result = ValidationUtils.validate_command(raw)
        assert result.error == "Command options must be a list"

    @pytest.mark.parametrize("cooldown", [-1, "5000", 1.5, True])
    def test_bad_cooldown(self, cooldown):
        result = ValidationUtils.validate_command(command(cooldown=cooldown))
        assert result.field == "cooldown"

    def test_bad_type(self):
        result = ValidationUtils.validate_command(command(type=9))
        assert result.field == "type"
        assert "Valid: 1, 2, 3" in result.error

    def test_bad_permissions(self):
        result = ValidationUtils.validate_command(command(permissions=["admin"]))
        assert result.field == "permissions"

    def test_first_failure_wins(self):
        # Both name and description are wrong; name is checked first
        result = ValidationUtils.validate_command(command("n" * 40, ""))
        assert result.field == "name"

    def test_to_error(self):
        result = ValidationUtils.validate_command(command(description=""))
        error = result.to_error()
        assert isinstance(error, ValidationError)
        assert error.field == "description"
        assert error.constraint == result.error


class TestIds:
    def test_snowflake(self):
        assert ValidationUtils.is_valid_snowflake("123456789012345678")
        assert ValidationUtils.is_valid_snowflake(123456789012345678)
        assert not ValidationUtils.is_valid_snowflake("not_a_number")
        assert not ValidationUtils.is_valid_snowflake(True)

    def test_guild_id_is_sanitized(self):
        result = ValidationUtils.validate_guild_id(" 123456789012345678\u200b ")
        assert result.valid
        assert result.sanitized == "123456789012345678"

    def test_guild_id_required(self):
        assert ValidationUtils.validate_guild_id("").error == "Guild ID is required"
        assert ValidationUtils.validate_guild_id("abc").error == "Invalid guild ID format"
