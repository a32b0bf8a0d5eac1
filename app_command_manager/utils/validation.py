"""
Validation Utilities
Platform constraint checks for command descriptors and Discord IDs
"""

import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from app_command_manager.utils.errors import ValidationError

# Discord snowflake ID pattern: 17-20 digits
SNOWFLAKE_REGEX = re.compile(r"^[0-9]{17,20}$")

# Application command limits
NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 32
DESCRIPTION_MIN_LENGTH = 1
DESCRIPTION_MAX_LENGTH = 100
MAX_OPTIONS = 25

INVALID_STRUCTURE = "Invalid command structure: missing data or name"

# Body keys interpreted by the validator; everything else passes through
_KNOWN_KEYS = ("name", "description", "options", "type", "cooldown", "guild_only", "permissions")


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        sanitized: Optional[str] = None,
        value: Optional[Any] = None,
        field: Optional[str] = None,
    ):
        self.valid = valid
        self.error = error
        self.sanitized = sanitized
        self.value = value
        self.field = field

    def __bool__(self) -> bool:
        return self.valid

    def to_error(self) -> ValidationError:
        """Convert a failed result into a ValidationError."""
        return ValidationError(self.field, self.error or "Invalid value")

    def __repr__(self) -> str:
        if self.valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, field={self.field!r}, error={self.error!r})"


def _fail(field: Optional[str], error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error, field=field)


def _is_text(value: Any, min_length: int, max_length: int) -> bool:
    return isinstance(value, str) and min_length <= len(value) <= max_length


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def extract_body(raw: Any) -> Tuple[Optional[Dict[str, Any]], Dict[str, Any]]:
        """
        Split a raw descriptor into its command body and top-level overrides.

        A raw descriptor is either ``{"data": <body>, "cooldown": ...}`` or a
        flat body. The body may be a mapping or any object with ``to_dict()``.

        Args:
            raw: Raw descriptor as exported by a command file

        Returns:
            Tuple of (body dict or None when unusable, overrides dict)
        """
        if raw is None or not isinstance(raw, Mapping):
            return None, {}

        if "data" in raw:
            body = raw["data"]
            overrides = {key: raw[key] for key in _KNOWN_KEYS if key in raw}
        else:
            body = raw
            overrides = {}

        if body is not None and not isinstance(body, Mapping):
            to_dict = getattr(body, "to_dict", None)
            if not callable(to_dict):
                return None, overrides
            try:
                body = to_dict()
            except Exception:
                return None, overrides

        if not isinstance(body, Mapping):
            return None, overrides

        return dict(body), overrides

    @staticmethod
    def validate_option(option: Any, index: int) -> ValidationResult:
        """
        Validate a single command option.

        Args:
            option: Raw option mapping
            index: Position of the option (1-based, used in messages)

        Returns:
            ValidationResult with valid status
        """
        if not isinstance(option, Mapping):
            return _fail("options", f"Option #{index} must be an object")

        name = option.get("name")
        if not isinstance(name, str) or not name:
            return _fail("options", f"Option #{index} is missing a name")

        description = option.get("description")
        if not isinstance(description, str) or not description:
            return _fail("options", f"Option '{name}' is missing a description")

        return ValidationResult(valid=True)

    @staticmethod
    def validate_command(raw: Any) -> ValidationResult:
        """
        Validate a raw command descriptor against platform constraints.

        Checks run in a fixed order and the first failure wins, so a given
        malformed input always produces the same reason. Malformed input is
        reported in the result, never raised.

        Args:
            raw: Raw descriptor

        Returns:
            ValidationResult whose ``value`` is the accepted CommandDescriptor
        """
        from app_command_manager.commands.descriptor import (
            CommandDescriptor,
            CommandOption,
            CommandType,
        )

        body, overrides = ValidationUtils.extract_body(raw)
        if body is None or body.get("name") is None:
            return _fail(None, INVALID_STRUCTURE)

        name = body["name"]
        if not _is_text(name, NAME_MIN_LENGTH, NAME_MAX_LENGTH):
            return _fail(
                "name",
                f"Command name must be a string of {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters",
            )

        description = body.get("description")
        if not _is_text(description, DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH):
            return _fail(
                "description",
                f"Command description must be a string of "
                f"{DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters",
            )

        raw_options = body.get("options")
        options: List[CommandOption] = []
        if raw_options is not None:
            if isinstance(raw_options, (str, bytes, Mapping)) or not hasattr(raw_options, "__iter__"):
                return _fail("options", "Command options must be a list")
            raw_options = list(raw_options)
            if len(raw_options) > MAX_OPTIONS:
                return _fail("options", f"Too many options ({len(raw_options)}/{MAX_OPTIONS})")
            for index, option in enumerate(raw_options, start=1):
                result = ValidationUtils.validate_option(option, index)
                if not result:
                    return result
                extra = {k: v for k, v in option.items() if k not in ("name", "description")}
                options.append(CommandOption(option["name"], option["description"], extra))

        merged = {key: body[key] for key in _KNOWN_KEYS if key in body}
        merged.update(overrides)

        cooldown = merged.get("cooldown")
        if cooldown is not None and (not _is_int(cooldown) or cooldown < 0):
            return _fail("cooldown", "Command cooldown must be a non-negative integer (ms)")

        command_type = merged.get("type")
        if command_type is None:
            command_type = CommandType.CHAT_INPUT
        try:
            command_type = CommandType(command_type)
        except ValueError:
            valid_types = ", ".join(str(int(t)) for t in CommandType)
            return _fail("type", f"Invalid command type. Valid: {valid_types}")

        permissions = merged.get("permissions")
        if permissions is not None:
            if isinstance(permissions, (str, bytes)) or not hasattr(permissions, "__iter__"):
                return _fail("permissions", "Command permissions must be a list of integers")
            permissions = list(permissions)
            if not all(_is_int(p) and p >= 0 for p in permissions):
                return _fail("permissions", "Command permissions must be a list of integers")

        extra = {k: v for k, v in body.items() if k not in _KNOWN_KEYS}

        descriptor = CommandDescriptor(
            name=name,
            description=description,
            options=options,
            type=command_type,
            cooldown=cooldown,
            guild_only=bool(merged.get("guild_only", False)),
            permissions=permissions,
            extra=extra,
        )
        return ValidationResult(valid=True, value=descriptor)

    @staticmethod
    def is_valid_snowflake(id_value: Union[str, int]) -> bool:
        """
        Check if value is a valid Discord snowflake ID.

        Args:
            id_value: ID to validate

        Returns:
            True if valid snowflake
        """
        if isinstance(id_value, bool) or not isinstance(id_value, (str, int)):
            return False
        return bool(SNOWFLAKE_REGEX.match(str(id_value)))

    @staticmethod
    def validate_guild_id(guild_id: Optional[Union[str, int]]) -> ValidationResult:
        """
        Validate and sanitize a guild/server ID.

        Args:
            guild_id: Guild ID to validate

        Returns:
            ValidationResult with valid status and sanitized value
        """
        if not guild_id:
            return ValidationResult(valid=False, error="Guild ID is required")

        sanitized = ValidationUtils.sanitize_input(str(guild_id))

        if not ValidationUtils.is_valid_snowflake(sanitized):
            return ValidationResult(valid=False, error="Invalid guild ID format")

        return ValidationResult(valid=True, sanitized=sanitized)

    @staticmethod
    def sanitize_input(input_value: str) -> str:
        """
        Sanitize user input to prevent injection.

        Args:
            input_value: Input to sanitize

        Returns:
            Sanitized input string
        """
        if not isinstance(input_value, str):
            return ""

        sanitized = input_value.strip()

        # Remove zero-width characters
        sanitized = re.sub(r"[\u200B-\u200D\uFEFF]", "", sanitized)

        # Remove control characters
        sanitized = re.sub(r"[\x00-\x1F\x7F-\x9F]", "", sanitized)

        return sanitized
