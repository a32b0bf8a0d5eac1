"""
Entry point for the application command bot.
"""

import asyncio
import logging
import sys

from app_command_manager.bot.client import run_bot
from app_command_manager.bot.config import config
from app_command_manager.utils.logger import get_logger, set_default_level

logger = get_logger("Main")


def main():
    """Main entry point."""
    if config.debug:
        set_default_level(logging.DEBUG)

    try:
        logger.info("Starting application command bot...")
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
