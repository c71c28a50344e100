"""Docker build helper with an interactive debug mode."""

from .builder import build
from .core import BuildAPIClient, BuildRequest
from .events import Extraction, ExtractionStatus, ImageResult, extract, extract_image_id
from .report import report
from .utils import package_context

__version__ = "0.1.0"

__all__ = [
    "BuildAPIClient",
    "BuildRequest",
    "Extraction",
    "ExtractionStatus",
    "ImageResult",
    "build",
    "extract",
    "extract_image_id",
    "package_context",
    "report",
]
