"""Helper functions for the bot handlers and collection processing."""

import logging
from pathlib import Path

from .messages import REDACTED

logger = logging.getLogger(__name__)

TELEGRAM_FILE_URL = "https://api.telegram.org/file/bot{token}/{file_path}"


def file_download_url(file_path: str, token: str) -> str:
    """Build the download URL of a Telegram file.

    Args:
        file_path: ``File.file_path`` returned by getFile, absolute or relative.
        token: Bot API token.

    Returns:
        Absolute download URL.
    """
    if file_path.startswith(("http://", "https://")):
        return file_path
    return TELEGRAM_FILE_URL.format(token=token, file_path=file_path.lstrip("/"))


def redact(text: str, secret: str | None) -> str:
    """Remove a secret from text shown to users or written to logs.

    Args:
        text: Text that may contain the secret.
        secret: Value to hide, nothing is replaced if empty.

    Returns:
        Text with every occurrence of the secret replaced.
    """
    if not secret:
        return text
    return text.replace(secret, REDACTED)


def safe_path_join(base_path: Path, user_path: str) -> Path:
    """Safely join paths preventing directory traversal attacks.

    Args:
        base_path: Base directory that should contain the result.
        user_path: Path component derived from user input.

    Returns:
        Resolved path within base_path.

    Raises:
        ValueError: If path traversal is detected.
    """
    base_resolved = base_path.resolve()
    full_path = (base_path / user_path).resolve()

    if not full_path.is_relative_to(base_resolved) or full_path == base_resolved:
        logger.error(f"Path validation error: {user_path}")
        raise ValueError(f"Invalid path: {user_path}")

    return full_path
