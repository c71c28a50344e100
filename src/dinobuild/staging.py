import shutil
import tempfile
from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import StagingError

CONTEXT_DOCKERFILE = "Dockerfile"


class StagingDirectory:
    """
    Temporary build context holding a single copy of the Dockerfile.

    The copy is always named ``Dockerfile`` so the build request can refer to
    it by a fixed name, whatever the source file is called. The directory is
    removed when the context manager exits, on success or failure.
    """

    def __init__(self, dockerfile: Path | str, prefix: str = "docker-dinosaur-build") -> None:
        self.dockerfile = Path(dockerfile)
        self.prefix = prefix
        self.path: Optional[Path] = None

    def __enter__(self) -> "StagingDirectory":
        """Create the directory and copy the Dockerfile into it."""
        try:
            self.path = Path(tempfile.mkdtemp(prefix=self.prefix))
        except OSError as e:
            raise StagingError(f"could not create temporary directory: {e}") from e

        logger.debug(f"Staging {self.dockerfile} in {self.path}")
        try:
            shutil.copyfile(self.dockerfile, self.path / CONTEXT_DOCKERFILE)
        except OSError as e:
            self.cleanup()
            raise StagingError(f"could not copy {self.dockerfile}: {e}") from e

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the context manager and remove the staging directory."""
        self.cleanup()
        return False

    def cleanup(self):
        """Remove the staging directory and everything in it."""
        if self.path:
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Removed staging directory {self.path}")
            self.path = None
