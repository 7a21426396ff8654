"""Data models for the images bot application.

Defines Pydantic models for the per-chat collection state, the photo
references taken from Telegram messages, and the results of downloading and
archiving a collection.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class PhotoRef(BaseModel):
    """Reference to one size of a Telegram photo.

    Attributes:
        file_id: Identifier used to request the file from the Bot API.
        file_unique_id: Stable identifier of the file across bots.
        width: Photo width in pixels.
        height: Photo height in pixels.
    """

    file_id: str
    file_unique_id: str = ""
    width: int = 0
    height: int = 0

    @property
    def area(self) -> int:
        """Pixel count used to pick the highest resolution size."""
        return self.width * self.height


class CollectedMessage(BaseModel):
    """A message received while the chat was collecting.

    Attributes:
        message_id: Telegram message identifier.
        photo: Largest size of the attached photo, None if the message has none.
    """

    message_id: int
    photo: PhotoRef | None = None


class UserState(BaseModel):
    """Collection state of a single chat.

    Attributes:
        is_collecting: Whether incoming messages are being collected.
        is_set_file_name: Whether the next text message sets the archive name.
        messages: Messages collected since /startcollect.
        file_name: Archive base name for the next archive, used once.
    """

    is_collecting: bool = False
    is_set_file_name: bool = False
    messages: list[CollectedMessage] = Field(default_factory=list)
    file_name: str | None = None


class CollectionSnapshot(BaseModel):
    """Messages and archive name taken out of a chat when collecting stops."""

    messages: list[CollectedMessage]
    file_name: str | None = None

    @property
    def photos(self) -> list[PhotoRef]:
        """Photos of the collected messages in the order they were received."""
        return [m.photo for m in self.messages if m.photo is not None]


class DownloadedPhoto(BaseModel):
    """Outcome of downloading one photo.

    Attributes:
        index: 1-based position of the photo in the collection.
        path: Local file path, None if the download failed.
        size_bytes: Number of bytes written.
        error: Failure description without the request URL.
    """

    index: int
    path: Path | None = None
    size_bytes: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.path is not None


class ArchiveResult(BaseModel):
    """A built ZIP archive ready to be sent.

    Attributes:
        path: Location of the archive on disk.
        file_name: Name the document is sent under.
        photo_count: Number of photos packed into the archive.
    """

    path: Path
    file_name: str
    photo_count: int


def largest_photo(sizes: Sequence[Any] | None) -> PhotoRef | None:
    """Pick the highest resolution size of a Telegram photo.

    Args:
        sizes: ``PhotoSize`` objects of a message, may be empty or None.

    Returns:
        PhotoRef for the size with the largest width*height, None if no sizes.
    """
    if not sizes:
        return None

    best = max(sizes, key=lambda size: size.width * size.height)
    return PhotoRef(
        file_id=best.file_id,
        file_unique_id=best.file_unique_id,
        width=best.width,
        height=best.height,
    )
