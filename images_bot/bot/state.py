"""Per-chat collection state.

Keeps one UserState per chat behind a single asyncio lock. The lock is only
held while state is read or mutated, never across Telegram or HTTP calls.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from ..config import config
from ..exceptions import InvalidFileNameError, NotCollectingError
from ..models import CollectedMessage, CollectionSnapshot, UserState
from ..services.archive import sanitize_file_name

logger = logging.getLogger(__name__)


class MessageOutcome(str, Enum):
    """What happened to a non-command message."""

    COLLECTED = "collected"
    FILE_NAME_SET = "file_name_set"
    FILE_NAME_REJECTED = "file_name_rejected"
    IGNORED = "ignored"


class SessionStore:
    """In-memory store of chat collection state."""

    def __init__(self, max_file_name_length: int | None = None) -> None:
        self._sessions: dict[int, UserState] = {}
        self._lock = asyncio.Lock()
        self.max_file_name_length = max_file_name_length or config.archive.max_file_name_length

    def _state(self, chat_id: int) -> UserState:
        return self._sessions.setdefault(chat_id, UserState())

    async def get(self, chat_id: int) -> UserState:
        """Return a copy of the chat state."""
        async with self._lock:
            return self._state(chat_id).model_copy(deep=True)

    async def start_collecting(self, chat_id: int) -> None:
        """Turn collection on and drop previously collected messages."""
        async with self._lock:
            state = self._state(chat_id)
            state.is_collecting = True
            state.messages.clear()
        logger.info("Chat %s started a collection", chat_id)

    async def start_set_file_name(self, chat_id: int) -> None:
        """Make the next text message of the chat the archive name."""
        async with self._lock:
            self._state(chat_id).is_set_file_name = True

    async def record_message(
        self, chat_id: int, message: CollectedMessage, text: str | None = None
    ) -> tuple[MessageOutcome, str | None]:
        """Route a non-command message according to the chat state.

        Collecting takes precedence over waiting for an archive name.

        Args:
            chat_id: Chat the message belongs to.
            message: Collected form of the message.
            text: Message text, used when the chat waits for a file name.

        Returns:
            Outcome and, for FILE_NAME_SET, the stored name.
        """
        async with self._lock:
            state = self._state(chat_id)

            if state.is_collecting:
                logger.debug("Chat %s collected message %s", chat_id, message.message_id)
                state.messages.append(message)
                return MessageOutcome.COLLECTED, None

            if state.is_set_file_name:
                logger.debug("Chat %s sent file name in message %s", chat_id, message.message_id)
                try:
                    file_name = sanitize_file_name(text or "", self.max_file_name_length)
                except InvalidFileNameError:
                    return MessageOutcome.FILE_NAME_REJECTED, None

                state.file_name = file_name
                state.is_set_file_name = False
                return MessageOutcome.FILE_NAME_SET, file_name

        return MessageOutcome.IGNORED, None

    async def take_collection(self, chat_id: int) -> CollectionSnapshot:
        """Stop collecting and move the collected messages out of the state.

        The archive name is consumed as well, so it applies to one archive only.

        Raises:
            NotCollectingError: If the chat has no active collection.
        """
        async with self._lock:
            state = self._state(chat_id)
            if not state.is_collecting:
                raise NotCollectingError()

            state.is_collecting = False
            snapshot = CollectionSnapshot(messages=state.messages, file_name=state.file_name)
            state.messages = []
            state.file_name = None

        logger.info(
            "Stopped collecting for chat %s. Processing %d messages.",
            chat_id,
            len(snapshot.messages),
        )
        return snapshot
