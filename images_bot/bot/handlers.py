"""Telegram bot handlers.

Thin handlers that keep per-chat state in the session store and delegate
archive building to the collection processor, which runs in the background
so the bot keeps answering other chats while photos are downloaded.
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from ..core.container import container
from ..models import CollectedMessage, largest_photo
from ..version import get_version
from .messages import (
    COLLECT_STARTED_MESSAGE,
    EMPTY_FILE_NAME_MESSAGE,
    FILE_NAME_PROMPT_MESSAGE,
    FILE_NAME_SET_MESSAGE,
    HELP_MESSAGE,
    VERSION_MESSAGE,
)
from .processing import CollectionProcessor
from .state import MessageOutcome, SessionStore

logger = logging.getLogger(__name__)

session_store: SessionStore = container.session_store()
collection_processor: CollectionProcessor = container.collection_processor()


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start and /help commands.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if update.message:
        await update.message.reply_text(HELP_MESSAGE)


async def start_collect(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /startcollect command.

    Starts a new collection for the chat, discarding anything collected before.
    """
    if not update.effective_chat or not update.message:
        return

    await session_store.start_collecting(update.effective_chat.id)
    await update.message.reply_text(COLLECT_STARTED_MESSAGE)


async def stop_collect(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /stopcollect command.

    Schedules the archive job in the background and returns immediately.
    """
    if not update.effective_chat:
        return

    chat_id = update.effective_chat.id
    context.application.create_task(
        collection_processor.stop_and_process(context.bot, chat_id),
        update=update,
        name=f"stopcollect-{chat_id}",
    )


async def version_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /version command."""
    if update.message:
        await update.message.reply_text(VERSION_MESSAGE.format(version=get_version()))


async def file_name_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /filename command.

    Asks for the archive name; the next text message of the chat sets it.
    """
    if not update.effective_chat or not update.message:
        return

    await update.message.reply_text(FILE_NAME_PROMPT_MESSAGE)
    await session_store.start_set_file_name(update.effective_chat.id)


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle non-command messages.

    Collected while the chat is collecting, used as the archive name while
    the chat waits for one, ignored otherwise.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    message = update.message
    if not update.effective_chat or not message:
        return

    chat_id = update.effective_chat.id
    collected = CollectedMessage(message_id=message.message_id, photo=largest_photo(message.photo))

    outcome, file_name = await session_store.record_message(chat_id, collected, message.text)

    if outcome is MessageOutcome.FILE_NAME_REJECTED:
        await message.reply_text(EMPTY_FILE_NAME_MESSAGE)
    elif outcome is MessageOutcome.FILE_NAME_SET:
        logger.info("Chat %s set archive name", chat_id)
        await message.reply_text(FILE_NAME_SET_MESSAGE.format(file_name=file_name))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers."""
    logger.error("Error while handling update %s", update, exc_info=context.error)
