"""
Logging utilities for the application command manager.
Uses Rich for colored console output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for log output
CUSTOM_THEME = Theme({
    "logging.level.success": "green",
    "logging.level.command": "cyan",
    "logging.level.debug": "dim cyan",
})

console = Console(theme=CUSTOM_THEME)

# Level applied by get_logger() when no explicit level is passed
_default_level = logging.INFO


def set_default_level(level: int) -> None:
    """Change the level of existing package loggers and of those created later."""
    global _default_level
    _default_level = level

    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith("app_command_manager.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: module default, INFO unless changed)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"app_command_manager.{name}")

    if level is None:
        level = _default_level

    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


class LoggerMixin:
    """Mixin class that provides logger functionality."""

    def __init__(self, name: str):
        self._logger = setup_logging(name)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self._logger.error(message, extra=kwargs)

    def success(self, message: str, **kwargs) -> None:
        """Log success message (info level with a [SUCCESS] prefix)."""
        self._logger.info(f"[SUCCESS] {message}", extra=kwargs)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return setup_logging(name)
