"""Bot command menu registration."""

import logging

from telegram import Bot, BotCommand
from telegram.error import TelegramError

from .messages import COMMAND_DESCRIPTIONS

logger = logging.getLogger(__name__)

# Telegram only accepts lowercase command names
BOT_COMMANDS: list[BotCommand] = [
    BotCommand(command, description) for command, description in COMMAND_DESCRIPTIONS.items()
]


async def register_commands(bot: Bot) -> bool:
    """Publish the command menu.

    Args:
        bot: Bot instance to register the commands for.

    Returns:
        True if Telegram accepted the command list, False otherwise.
    """
    logger.info("Registering bot commands")
    try:
        await bot.set_my_commands(BOT_COMMANDS)
    except TelegramError as e:
        logger.error(f"Failed to register commands: {e}")
        return False

    logger.info("Commands registered")
    return True
