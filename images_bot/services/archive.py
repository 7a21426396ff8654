"""ZIP archive building and naming.

Builds the archive sent back to the user and derives its file name, either
from the name the user set with /filename or from the default template.
"""

import logging
import re
import zipfile
from datetime import datetime
from pathlib import Path

from ..config import ArchiveConfig, config
from ..exceptions import ArchiveError, InvalidFileNameError

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".zip"

# Filesystem limit for a single path component, in bytes
MAX_FILE_NAME_BYTES = 255

_UNSAFE_CHARS = re.compile(r"[\x00-\x1f\x7f/\\]")


def sanitize_file_name(text: str, max_length: int = 128) -> str:
    """Turn user text into a safe archive base name.

    Removes control characters and path separators, leading dots and a
    trailing ``.zip``, so the name can never leave the job directory. The
    name is also cut so that ``name + ".zip"`` fits in MAX_FILE_NAME_BYTES
    of UTF-8 without splitting a character.

    Args:
        text: Raw text sent by the user.
        max_length: Maximum length of the resulting name.

    Returns:
        Cleaned name without the ``.zip`` suffix.

    Raises:
        InvalidFileNameError: If nothing usable is left.
    """
    name = _UNSAFE_CHARS.sub("", text).strip()
    if name.lower().endswith(ARCHIVE_SUFFIX):
        name = name[: -len(ARCHIVE_SUFFIX)].rstrip()
    name = name.lstrip(".").strip()
    name = name[:max_length]
    max_bytes = MAX_FILE_NAME_BYTES - len(ARCHIVE_SUFFIX.encode())
    name = name.encode()[:max_bytes].decode(errors="ignore").rstrip()

    if not name:
        raise InvalidFileNameError()
    return name


def archive_name(
    file_name: str | None,
    chat_id: int,
    now: datetime | None = None,
    settings: ArchiveConfig | None = None,
) -> str:
    """Return the archive file name for a collection.

    Args:
        file_name: Name set by the user, None to use the default template.
        chat_id: Chat the archive is built for.
        now: Time used for the default name, defaults to local now.
        settings: Archive layout, defaults to the global configuration.

    Returns:
        File name ending in ``.zip``.
    """
    if file_name:
        return f"{file_name}{ARCHIVE_SUFFIX}"

    settings = settings or config.archive
    now = now or datetime.now()
    timestamp = now.strftime(settings.timestamp_format)
    return settings.name_template.format(timestamp=timestamp, chat_id=chat_id) + ARCHIVE_SUFFIX


class ArchiveBuilder:
    """Packs a directory of downloaded photos into a ZIP file."""

    def __init__(self, compress_level: int = 6, entry_permissions: int = 0o755):
        self.compress_level = compress_level
        self.entry_permissions = entry_permissions

    def build(self, src_dir: Path, dst_file: Path) -> int:
        """Write every regular file of ``src_dir`` into ``dst_file``.

        Entries are stored flat, sorted by name and deflated.

        Args:
            src_dir: Directory holding the photos.
            dst_file: Archive path to create.

        Returns:
            Number of files written to the archive.

        Raises:
            ArchiveError: If the directory cannot be read or the archive written.
        """
        try:
            files = sorted(p for p in src_dir.iterdir() if p.is_file())
            with zipfile.ZipFile(
                dst_file,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compress_level,
            ) as zf:
                for path in files:
                    info = zipfile.ZipInfo.from_file(path, arcname=path.name)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = (0o100000 | self.entry_permissions) << 16
                    with open(path, "rb") as f:
                        zf.writestr(info, f.read(), compresslevel=self.compress_level)
        except OSError as e:
            logger.error(f"Failed to create archive {dst_file.name}: {e}")
            raise ArchiveError() from e

        logger.info("Created zip file: %s (%d entries)", dst_file.name, len(files))
        return len(files)
