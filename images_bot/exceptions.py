"""Exception hierarchy for the images bot.

Every error carries a ``user_message`` that is safe to show in the chat.
Expected situations (nothing to process) and real failures share the base
class so the processor can tell them apart from unexpected exceptions.
"""

from .bot.messages import (
    ARCHIVE_FAILED_MESSAGE,
    DOWNLOAD_FAILED_DEFAULT,
    EMPTY_FILE_NAME_MESSAGE,
    NO_MESSAGES_MESSAGE,
    NO_PHOTOS_MESSAGE,
    NOT_COLLECTING_MESSAGE,
)


class ImagesBotError(Exception):
    """Base exception for all images bot errors.

    Attributes:
        user_message: Text that can be sent to the user as is.
    """

    user_message: str = "❌ 处理失败"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)
        if message is not None:
            self.user_message = message


class NotCollectingError(ImagesBotError):
    """Raised when /stopcollect is used without an active collection."""

    user_message = NOT_COLLECTING_MESSAGE


class EmptyCollectionError(ImagesBotError):
    """Raised when a collection was stopped without any messages."""

    user_message = NO_MESSAGES_MESSAGE


class NoPhotosError(ImagesBotError):
    """Raised when none of the collected messages contains a photo."""

    user_message = NO_PHOTOS_MESSAGE


class InvalidFileNameError(ImagesBotError):
    """Raised when the requested archive name is empty after cleanup."""

    user_message = EMPTY_FILE_NAME_MESSAGE


class DownloadError(ImagesBotError):
    """Raised when no photo of a collection could be downloaded."""

    user_message = DOWNLOAD_FAILED_DEFAULT


class ArchiveError(ImagesBotError):
    """Raised when the ZIP archive cannot be written."""

    user_message = ARCHIVE_FAILED_MESSAGE
