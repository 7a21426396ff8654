"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including test environment,
Telegram object mocks and a collection processor working in a temporary
directory. Ensures test isolation and consistency.
"""

import os
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from images_bot.bot.processing import CollectionProcessor
from images_bot.bot.state import SessionStore
from images_bot.config import ArchiveConfig
from images_bot.models import DownloadedPhoto
from images_bot.services.archive import ArchiveBuilder

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "123456:test_bot_token_placeholder")
TEST_CHAT_ID = 4242
FIXED_TIME = datetime(2025, 1, 2, 15, 45)


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        'TG_BOT_TOKEN': TEST_BOT_TOKEN,
        'LOG_LEVEL': 'DEBUG',
        'IMAGES_BOT_GIT_DESCRIBE': 'g1234abc',
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


def make_photo_size(file_id: str, width: int, height: int) -> MagicMock:
    """Build a PhotoSize-like mock."""
    return MagicMock(file_id=file_id, file_unique_id=f"u-{file_id}", width=width, height=height)


@pytest.fixture
def photo_size_factory():
    """Factory for PhotoSize-like mocks."""
    return make_photo_size


@pytest.fixture
def photo_sizes():
    """Three sizes of one photo, the largest in the middle."""
    return (
        make_photo_size("small", 90, 60),
        make_photo_size("large", 1280, 853),
        make_photo_size("medium", 320, 213),
    )


@pytest.fixture
def make_update():
    """Factory for Telegram update mocks."""

    def _make_update(text: str | None = None, photo=(), message_id: int = 1, chat_id: int = TEST_CHAT_ID):
        update = MagicMock()
        update.effective_chat.id = chat_id
        update.message.message_id = message_id
        update.message.text = text
        update.message.photo = photo
        update.message.reply_text = AsyncMock()
        return update

    return _make_update


@pytest.fixture
def mock_bot():
    """Mock Telegram bot for processing tests."""
    bot = AsyncMock()
    bot.token = TEST_BOT_TOKEN

    async def _get_file(file_id):
        return MagicMock(file_path=f"https://api.telegram.org/file/bot{TEST_BOT_TOKEN}/photos/{file_id}.jpg")

    bot.get_file = AsyncMock(side_effect=_get_file)
    bot.send_message = AsyncMock()
    bot.send_document = AsyncMock()
    return bot


@pytest.fixture
def session_store():
    """Fresh session store."""
    return SessionStore(max_file_name_length=128)


@pytest.fixture
def fake_downloader():
    """Downloader mock writing a small file per URL instead of using the network."""
    downloader = MagicMock()
    downloader.failed_indexes = set()

    async def _download_all(urls: list[str], target_dir: Path) -> list[DownloadedPhoto]:
        results = []
        for index, _url in enumerate(urls, start=1):
            if index in downloader.failed_indexes:
                results.append(DownloadedPhoto(index=index, error="HTTP 404"))
                continue
            path = target_dir / f"image_{index}.jpg"
            path.write_bytes(b"\xff\xd8jpeg" + bytes([index]))
            results.append(DownloadedPhoto(index=index, path=path, size_bytes=6))
        return results

    downloader.download_all = AsyncMock(side_effect=_download_all)
    downloader.close = AsyncMock()
    return downloader


@pytest.fixture
def processor(session_store, fake_downloader, tmp_path):
    """Collection processor working in a temporary directory."""
    return CollectionProcessor(
        store=session_store,
        downloader=fake_downloader,
        archive_builder=ArchiveBuilder(),
        work_dir=tmp_path,
        archive_settings=ArchiveConfig(),
        clock=lambda: FIXED_TIME,
    )
