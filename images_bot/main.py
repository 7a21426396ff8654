"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles both
webhook mode (when a public domain is configured) and polling mode (default).
Configures logging and registers bot handlers for commands and message
processing.
"""

import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .bot.commands import register_commands
from .bot.handlers import (
    collection_processor,
    error_handler,
    file_name_command,
    handle_message,
    help_command,
    start_collect,
    stop_collect,
    version_command,
)
from .config import config
from .version import get_version

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging.

    The httpx logger is raised to WARNING because its request lines contain
    the bot token.
    """
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def post_init(application: Application) -> None:
    """Register the command menu once the bot is connected."""
    logger.info("Connected to Telegram as @%s", application.bot.username)
    await register_commands(application.bot)


async def post_shutdown(application: Application) -> None:
    """Release HTTP resources."""
    await collection_processor.downloader.close()
    logger.info("Photo downloader closed")


def build_application(token: str) -> Application:
    """Create the bot application with all handlers registered.

    Args:
        token: Telegram bot API token.

    Returns:
        Configured Application, not yet running.
    """
    app = (
        Application.builder()
        .token(token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    app.add_handler(CommandHandler(["start", "help"], help_command))
    app.add_handler(CommandHandler("startcollect", start_collect))
    app.add_handler(CommandHandler("stopcollect", stop_collect))
    app.add_handler(CommandHandler("version", version_command))
    app.add_handler(CommandHandler("filename", file_name_command))

    app.add_handler(MessageHandler(~filters.COMMAND, handle_message))
    app.add_error_handler(error_handler)

    return app


def main() -> None:
    """Main application entry point.

    Initializes the Telegram bot application, registers command and message
    handlers, and starts the bot in either webhook mode or polling mode.

    Raises:
        RuntimeError: If TG_BOT_TOKEN environment variable is not set.
    """
    configure_logging(config.bot.log_level)

    if not config.bot.bot_token:
        raise RuntimeError("TG_BOT_TOKEN must be set")

    logger.info("Starting telegram-images-bot %s", get_version())
    app = build_application(config.bot.bot_token)

    # Run in webhook or polling mode
    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info("Starting webhook on %s:%s", config.bot.listen_host, config.bot.port)

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
            allowed_updates=Update.ALL_TYPES,
        )
    else:
        logger.info("No webhook domain configured; using long-polling")
        app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
