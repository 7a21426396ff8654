"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the collection components from configuration, so handlers and tests share the
same construction logic.
"""

from dependency_injector import containers, providers

from ..bot.processing import CollectionProcessor
from ..bot.state import SessionStore
from ..config import Config
from ..config import config as default_config
from ..services.archive import ArchiveBuilder
from ..services.downloader import PhotoDownloader


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Configuration()
    archive_settings = providers.Object(None)

    # Services
    session_store = providers.Singleton(
        SessionStore, max_file_name_length=config.archive.max_file_name_length
    )
    photo_downloader = providers.Singleton(
        PhotoDownloader,
        concurrency=config.bot.download_concurrency,
        timeout=config.bot.download_timeout,
        entry_name_template=config.archive.entry_name_template,
    )
    archive_builder = providers.Singleton(
        ArchiveBuilder,
        compress_level=config.archive.compress_level,
        entry_permissions=config.archive.entry_permissions,
    )

    # Bot components
    collection_processor = providers.Singleton(
        CollectionProcessor,
        store=session_store,
        downloader=photo_downloader,
        archive_builder=archive_builder,
        work_dir=config.bot.work_dir,
        archive_settings=archive_settings,
    )


def create_container(app_config: Config | None = None) -> Container:
    """Build a container configured from the application configuration.

    Args:
        app_config: Configuration to wire from, defaults to the global one.

    Returns:
        Configured Container.
    """
    app_config = app_config or default_config
    container = Container()
    container.config.from_dict(
        {
            "bot": app_config.bot.model_dump(),
            "archive": app_config.archive.model_dump(),
        }
    )
    container.archive_settings.override(providers.Object(app_config.archive))
    return container


# Global container instance
container = create_container()
