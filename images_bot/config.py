"""Configuration management for the images bot.

Handles all application configuration including environment variables, the
``.env`` file, the YAML archive layout file and default settings. Provides
structured configuration classes for the bot runtime and archive building.
"""

from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ArchiveConfig(BaseSettings):
    """ZIP archive layout parameters.

    Attributes:
        entry_name_template: Name of each photo inside the archive, formatted
            with the 1-based ``index`` of the photo.
        entry_permissions: Unix permissions stored for every archive entry.
        name_template: Default archive base name, formatted with
            ``timestamp`` and ``chat_id``.
        timestamp_format: strftime format of the default name timestamp.
        compress_level: Deflate compression level (0-9).
        max_file_name_length: Longest archive name a user may set.
    """
    entry_name_template: str = "image_{index}.jpg"
    entry_permissions: int = 0o755
    name_template: str = "images_{timestamp}_{chat_id}"
    timestamp_format: str = "%Y-%m-%d:%H:%M"
    compress_level: int = Field(default=6, ge=0, le=9)
    max_file_name_length: int = 128


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        log_level: Root logging level name.
        work_dir: Directory where per-request job directories are created.
        download_concurrency: Maximum simultaneous photo downloads per job.
        download_timeout: Total HTTP timeout for a single photo download.
        webhook_domain: Public domain for webhooks, polling mode if unset.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    bot_token: str = Field(default="", validation_alias="TG_BOT_TOKEN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    work_dir: Path = Field(default=Path("."), validation_alias="WORK_DIR")
    download_concurrency: int = Field(default=5, ge=1, validation_alias="DOWNLOAD_CONCURRENCY")
    download_timeout: int = Field(default=60, ge=1, validation_alias="DOWNLOAD_TIMEOUT")
    webhook_domain: str | None = Field(default=None, validation_alias="WEBHOOK_DOMAIN")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class Config:
    """Application configuration manager.

    Centralizes loading of environment settings and the archive layout file.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to images_bot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)
        self.bot = BotConfig()
        self.archive = self._load_archive_config()

    def _load_archive_config(self) -> ArchiveConfig:
        """Load archive layout from YAML configuration.

        Returns:
            ArchiveConfig built from archive.yml, or defaults if the file is absent.
        """
        archive_path = self.config_dir / "archive.yml"
        if not archive_path.exists():
            return ArchiveConfig()

        with open(archive_path) as f:
            data = yaml.safe_load(f) or {}

        defaults = ArchiveConfig()
        entry = data.get("entry", {})
        archive = data.get("archive", {})
        file_name = data.get("file_name", {})
        return ArchiveConfig(
            entry_name_template=entry.get("name_template", defaults.entry_name_template),
            entry_permissions=entry.get("permissions", defaults.entry_permissions),
            name_template=archive.get("name_template", defaults.name_template),
            timestamp_format=archive.get("timestamp_format", defaults.timestamp_format),
            compress_level=archive.get("compress_level", defaults.compress_level),
            max_file_name_length=file_name.get("max_length", defaults.max_file_name_length),
        )


# Global configuration instance
config = Config()
