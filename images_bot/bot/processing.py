"""Collection processing after /stopcollect.

Turns a finished collection into a ZIP archive: resolves the download URL
of every collected photo, downloads them concurrently into a per-request job
directory, packs them and sends the archive back. The job directory is
removed whatever the outcome.
"""

import asyncio
import logging
import shutil
import uuid
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from telegram import Bot
from telegram.error import TelegramError

from ..config import ArchiveConfig, config
from ..exceptions import (
    DownloadError,
    EmptyCollectionError,
    ImagesBotError,
    NoPhotosError,
    NotCollectingError,
)
from ..models import ArchiveResult, CollectionSnapshot, PhotoRef
from ..services.archive import ArchiveBuilder, archive_name
from ..services.downloader import PhotoDownloader
from .messages import (
    DONE_MESSAGE,
    DOWNLOAD_FAILED_MESSAGE,
    PROCESSING_FAILED_MESSAGE,
    PROCESSING_MESSAGE,
)
from .state import SessionStore
from .utils import file_download_url, redact, safe_path_join

logger = logging.getLogger(__name__)


class CollectionProcessor:
    """Builds and delivers the archive of a chat's collection.

    Responsibilities:
    - Take the collection out of the session store
    - Resolve photo download URLs through the Bot API
    - Download photos and build the archive
    - Send the archive and clean up the job directory
    """

    def __init__(
        self,
        store: SessionStore,
        downloader: PhotoDownloader,
        archive_builder: ArchiveBuilder,
        work_dir: Path | str = ".",
        archive_settings: ArchiveConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.downloader = downloader
        self.archive_builder = archive_builder
        self.work_dir = Path(work_dir)
        self.archive_settings = archive_settings or config.archive
        self._clock = clock or datetime.now

    async def stop_and_process(self, bot: Bot, chat_id: int) -> None:
        """Background entry point of /stopcollect.

        Never raises: failures are logged and reported to the chat.
        """
        try:
            await self.process(bot, chat_id)
        except Exception as e:
            if isinstance(e, ImagesBotError):
                error = e.user_message
            else:
                error = redact(str(e), bot.token) or type(e).__name__
            logger.error("Error processing for chat %s: %s", chat_id, redact(repr(e), bot.token))
            try:
                await bot.send_message(chat_id, PROCESSING_FAILED_MESSAGE.format(error=error))
            except TelegramError as send_error:
                logger.warning("Failed to report processing error to chat %s: %s", chat_id, send_error)

    async def process(self, bot: Bot, chat_id: int) -> ArchiveResult | None:
        """Process the collection of a chat.

        Returns:
            The delivered archive, None if there was nothing to process.

        Raises:
            ImagesBotError: If downloading or archiving failed.
            TelegramError: If a Bot API call failed.
        """
        try:
            snapshot = await self._take_snapshot(chat_id)
            await bot.send_message(chat_id, PROCESSING_MESSAGE)
            urls = await self.resolve_photo_urls(bot, snapshot.photos)
        except (NotCollectingError, EmptyCollectionError, NoPhotosError) as e:
            await bot.send_message(chat_id, e.user_message)
            return None

        job_dir = safe_path_join(self.work_dir, f"temp_{chat_id}_{uuid.uuid4()}")
        try:
            result = await self._build_archive(chat_id, snapshot, urls, job_dir)

            await bot.send_message(chat_id, DONE_MESSAGE.format(count=result.photo_count))
            with open(result.path, "rb") as f:
                await bot.send_document(chat_id, document=f, filename=result.file_name)
            logger.info("Sent zip file to chat %s", chat_id)
            return result
        finally:
            await asyncio.to_thread(shutil.rmtree, job_dir, True)
            logger.info("Cleaned up temporary files for chat %s", chat_id)

    async def _take_snapshot(self, chat_id: int) -> CollectionSnapshot:
        snapshot = await self.store.take_collection(chat_id)
        if not snapshot.messages:
            raise EmptyCollectionError()
        return snapshot

    async def resolve_photo_urls(self, bot: Bot, photos: list[PhotoRef]) -> list[str]:
        """Resolve the download URL of every photo.

        Raises:
            NoPhotosError: If there are no photos.
        """
        if not photos:
            raise NoPhotosError()

        urls = []
        for photo in photos:
            file = await bot.get_file(photo.file_id)
            if not file.file_path:
                raise DownloadError()
            urls.append(file_download_url(file.file_path, bot.token))
        return urls

    async def _build_archive(
        self, chat_id: int, snapshot: CollectionSnapshot, urls: list[str], job_dir: Path
    ) -> ArchiveResult:
        images_dir = job_dir / "images"
        await asyncio.to_thread(images_dir.mkdir, parents=True, exist_ok=True)

        downloads = await self.downloader.download_all(urls, images_dir)
        downloaded = [d for d in downloads if d.ok]
        failed = len(downloads) - len(downloaded)
        if not downloaded:
            raise DownloadError(DOWNLOAD_FAILED_MESSAGE.format(failed=failed, total=len(downloads)))
        if failed:
            logger.warning("Chat %s: %d of %d photos failed to download", chat_id, failed, len(downloads))

        file_name = archive_name(snapshot.file_name, chat_id, self._clock(), self.archive_settings)
        zip_path = job_dir / file_name
        count = await asyncio.to_thread(self.archive_builder.build, images_dir, zip_path)

        return ArchiveResult(path=zip_path, file_name=file_name, photo_count=count)
