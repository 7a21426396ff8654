"""Build version reporting.

The version shown by /version is the package version followed by the output
of ``git describe --always``. Container images are built without the ``.git``
directory, so the describe part can also be baked in through the
``IMAGES_BOT_GIT_DESCRIBE`` environment variable.
"""

import logging
import os
import subprocess
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from . import __version__

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "telegram-images-bot"
GIT_DESCRIBE_ENV = "IMAGES_BOT_GIT_DESCRIBE"


def package_version() -> str:
    """Return the installed distribution version, or the source version."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return __version__


def git_describe() -> str:
    """Return ``git describe --always`` output, empty when unavailable.

    Returns:
        Trimmed describe string from the environment override or git itself.
    """
    override = os.getenv(GIT_DESCRIBE_ENV, "").strip()
    if override:
        return override

    try:
        result = subprocess.run(
            ["git", "describe", "--always"],
            capture_output=True,
            text=True,
            check=False,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("`git describe` err: %s", e)
        return ""

    if result.returncode != 0:
        logger.debug("`git describe` exited with %s: %s", result.returncode, result.stderr.strip())
        return ""

    return result.stdout.strip()


@lru_cache(maxsize=1)
def get_version() -> str:
    """Full version string, e.g. ``0.1.0-a1b2c3d``.

    Returns:
        Package version joined with the git describe output, or the bare
        package version when no describe information is available.
    """
    base = package_version()
    describe = git_describe()
    if not describe:
        return base
    return f"{base}-{describe}"
