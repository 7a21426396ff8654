"""Integration tests for bot handlers with a real session store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from images_bot.bot import handlers
from images_bot.bot.messages import (
    COLLECT_STARTED_MESSAGE,
    EMPTY_FILE_NAME_MESSAGE,
    FILE_NAME_PROMPT_MESSAGE,
    HELP_MESSAGE,
)
from images_bot.version import get_version


@pytest.fixture
def bot_context():
    context = MagicMock()
    context.bot = AsyncMock()
    context.application.create_task = MagicMock(side_effect=lambda coro, **kwargs: coro.close())
    return context


@pytest.fixture(autouse=True)
def fresh_state(monkeypatch, session_store, processor):
    monkeypatch.setattr(handlers, "session_store", session_store)
    monkeypatch.setattr(handlers, "collection_processor", processor)


class TestBotHandlers:
    """Test command and message handlers."""

    @pytest.mark.asyncio
    async def test_help_lists_commands(self, make_update, bot_context):
        update = make_update("/help")

        await handlers.help_command(update, bot_context)

        update.message.reply_text.assert_awaited_once_with(HELP_MESSAGE)
        assert "/startcollect" in HELP_MESSAGE

    @pytest.mark.asyncio
    async def test_version_reply(self, make_update, bot_context):
        get_version.cache_clear()
        update = make_update("/version")

        await handlers.version_command(update, bot_context)

        reply = update.message.reply_text.await_args.args[0]
        assert reply.startswith("当前版本：")
        assert reply.endswith("-g1234abc")
        get_version.cache_clear()

    @pytest.mark.asyncio
    async def test_start_collect_then_photos_are_collected(
        self, make_update, bot_context, photo_sizes, session_store
    ):
        start = make_update("/startcollect")
        await handlers.start_collect(start, bot_context)
        start.message.reply_text.assert_awaited_once_with(COLLECT_STARTED_MESSAGE)

        photo_update = make_update(photo=photo_sizes, message_id=2)
        text_update = make_update("caption only", message_id=3)
        await handlers.handle_message(photo_update, bot_context)
        await handlers.handle_message(text_update, bot_context)

        state = await session_store.get(start.effective_chat.id)
        assert [m.message_id for m in state.messages] == [2, 3]
        assert state.messages[0].photo.file_id == "large"
        assert state.messages[1].photo is None
        photo_update.message.reply_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_messages_without_collection_are_ignored(
        self, make_update, bot_context, photo_sizes, session_store
    ):
        update = make_update(photo=photo_sizes)

        await handlers.handle_message(update, bot_context)

        update.message.reply_text.assert_not_awaited()
        assert (await session_store.get(update.effective_chat.id)).messages == []

    @pytest.mark.asyncio
    async def test_file_name_flow(self, make_update, bot_context, session_store):
        command = make_update("/filename")
        await handlers.file_name_command(command, bot_context)
        command.message.reply_text.assert_awaited_once_with(FILE_NAME_PROMPT_MESSAGE)

        empty = make_update(text=None, message_id=2)
        await handlers.handle_message(empty, bot_context)
        empty.message.reply_text.assert_awaited_once_with(EMPTY_FILE_NAME_MESSAGE)

        named = make_update("summer trip", message_id=3)
        await handlers.handle_message(named, bot_context)
        named.message.reply_text.assert_awaited_once_with("✅已设置文件名为 summer trip.zip")

        state = await session_store.get(command.effective_chat.id)
        assert state.file_name == "summer trip"
        assert state.is_set_file_name is False

    @pytest.mark.asyncio
    async def test_stop_collect_runs_in_background(self, make_update, bot_context, processor):
        update = make_update("/stopcollect")

        await handlers.stop_collect(update, bot_context)

        bot_context.application.create_task.assert_called_once()
        kwargs = bot_context.application.create_task.call_args.kwargs
        assert kwargs["update"] is update
        assert kwargs["name"] == f"stopcollect-{update.effective_chat.id}"
        update.message.reply_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stop_collect_task_processes_chat(self, make_update, bot_context, processor):
        update = make_update("/stopcollect")
        processor.stop_and_process = AsyncMock()
        scheduled = []
        bot_context.application.create_task = MagicMock(
            side_effect=lambda coro, **kwargs: scheduled.append(coro)
        )

        await handlers.stop_collect(update, bot_context)
        await scheduled[0]

        processor.stop_and_process.assert_awaited_once_with(bot_context.bot, update.effective_chat.id)
