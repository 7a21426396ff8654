"""Photo downloading from the Telegram file API.

Downloads the photos of a collection concurrently with a shared aiohttp
session. A failed download only drops that photo; callers decide what to do
when nothing could be downloaded.
"""

import asyncio
import logging
from pathlib import Path

import aiohttp

from ..models import DownloadedPhoto

logger = logging.getLogger(__name__)


def create_session(timeout: int) -> aiohttp.ClientSession:
    """Create configured aiohttp session for file downloads.

    Args:
        timeout: Total timeout of a single request in seconds.

    Returns:
        aiohttp.ClientSession: Configured HTTP session for making requests.
    """
    connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    headers = {"User-Agent": "telegram-images-bot"}
    return aiohttp.ClientSession(connector=connector, timeout=client_timeout, headers=headers)


class PhotoDownloader:
    """Downloads photo files into a job directory.

    Download URLs embed the bot token, so they are never logged and never
    copied into error descriptions.
    """

    def __init__(
        self,
        concurrency: int = 5,
        timeout: int = 60,
        entry_name_template: str = "image_{index}.jpg",
    ) -> None:
        self.concurrency = concurrency
        self.timeout = timeout
        self.entry_name_template = entry_name_template
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = create_session(self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the shared HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def download(self, index: int, url: str, target_dir: Path) -> DownloadedPhoto:
        """Download a single photo as ``image_<index>.jpg``.

        Args:
            index: 1-based position of the photo in the collection.
            url: File download URL.
            target_dir: Directory the file is written to.

        Returns:
            DownloadedPhoto with either the written path or an error description.
        """
        file_path = target_dir / self.entry_name_template.format(index=index)
        session = self._get_session()

        try:
            async with session.get(url) as response:
                if response.status != 200:
                    logger.warning("Photo %d download failed with HTTP %s", index, response.status)
                    return DownloadedPhoto(index=index, error=f"HTTP {response.status}")
                data = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Photo %d download failed: %s", index, type(e).__name__)
            return DownloadedPhoto(index=index, error=type(e).__name__)

        try:
            await asyncio.to_thread(file_path.write_bytes, data)
        except OSError as e:
            logger.error("Photo %d could not be written: %s", index, type(e).__name__)
            return DownloadedPhoto(index=index, error=type(e).__name__)

        return DownloadedPhoto(index=index, path=file_path, size_bytes=len(data))

    async def download_all(self, urls: list[str], target_dir: Path) -> list[DownloadedPhoto]:
        """Download all photos concurrently.

        Args:
            urls: Download URLs in collection order.
            target_dir: Existing directory for the files.

        Returns:
            One DownloadedPhoto per URL, in the same order.
        """
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(index: int, url: str) -> DownloadedPhoto:
            async with semaphore:
                return await self.download(index, url, target_dir)

        results = await asyncio.gather(
            *(_bounded(i, url) for i, url in enumerate(urls, start=1))
        )

        ok = sum(1 for r in results if r.ok)
        logger.info("Downloaded %d/%d photos to %s", ok, len(urls), target_dir.name)
        return list(results)
