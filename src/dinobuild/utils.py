from pathlib import Path
from typing import BinaryIO

from docker.utils import tar
from loguru import logger

from .errors import PackagingError


def package_context(directory: Path | str) -> BinaryIO:
    """
    Package a build context directory into a tar stream for the daemon.

    Relative paths and file contents are preserved. The returned file object
    is positioned at the start and meant to be read once.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise PackagingError(f"build context {directory} is not a directory")

    try:
        context = tar(str(directory))
    except OSError as e:
        raise PackagingError(f"could not create tar: {e}") from e

    logger.debug(f"Packaged build context from {directory}")
    return context
