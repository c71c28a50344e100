"""Decoding of the daemon's streamed build log.

The ``/build`` endpoint answers with a sequence of JSON objects. Most of them
are progress events (``stream``, ``status``, ``error``); the built image's ID
arrives in an auxiliary event, ``{"aux": {"ID": "sha256:..."}}``.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Iterator

from docker.errors import StreamParseError
from docker.utils.json_stream import json_decoder, json_splitter, split_buffer
from loguru import logger

READ_SIZE = 8192


def _decode_tail(buffered: str):
    # Trailing whitespace after the last event is not a record.
    if not buffered.strip():
        return None
    return json_decoder.decode(buffered)


@dataclass
class ImageResult:
    id: str = ""


class ExtractionStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass
class Extraction:
    status: ExtractionStatus
    image: ImageResult = field(default_factory=ImageResult)
    detail: str = ""

    @property
    def image_id(self) -> str:
        """The image ID, empty unless an ID was found."""
        if self.status is ExtractionStatus.FOUND:
            return self.image.id
        return ""


def _chunks(stream) -> Iterator[bytes]:
    # A streaming requests.Response yields chunks as the daemon sends them.
    if hasattr(stream, "iter_content"):
        return stream.iter_content(chunk_size=None)
    return iter(partial(stream.read, READ_SIZE), b"")


def decode_image_result(aux: Any) -> ImageResult:
    """
    Decode an auxiliary payload into an ImageResult.

    Keys are matched case-insensitively, as the daemon's own client does.

    Raises:
        ValueError: if the payload is not an object with a string ID
    """
    if not isinstance(aux, dict):
        raise ValueError(f"aux payload is not an object: {aux!r}")
    for key, value in aux.items():
        if key.lower() == "id":
            if not isinstance(value, str):
                raise ValueError(f"aux ID is not a string: {value!r}")
            return ImageResult(id=value)
    raise ValueError(f"aux payload has no ID: {aux!r}")


def _log_progress(event: dict):
    if event.get("error"):
        logger.warning(f"Build error: {str(event['error']).rstrip()}")
    elif event.get("stream"):
        logger.debug(str(event["stream"]).rstrip())
    elif event.get("status"):
        logger.debug(str(event["status"]).rstrip())


def extract(stream) -> Extraction:
    """
    Read build events until the first auxiliary result and decode it.

    The rest of the stream is always read and discarded before returning,
    so the connection can be released even when decoding stopped early.

    Args:
        stream: Binary file object or streaming requests.Response

    Returns:
        Extraction tagged FOUND, NOT_FOUND or MALFORMED
    """
    chunks = _chunks(stream)
    extraction = Extraction(ExtractionStatus.NOT_FOUND)

    try:
        for event in split_buffer(chunks, json_splitter, _decode_tail):
            if not isinstance(event, dict):
                continue
            aux = event.get("aux")
            if aux is None:
                _log_progress(event)
                continue
            try:
                extraction = Extraction(ExtractionStatus.FOUND, decode_image_result(aux))
            except ValueError as e:
                extraction = Extraction(ExtractionStatus.MALFORMED, detail=str(e))
            break
    except StreamParseError as e:
        extraction = Extraction(ExtractionStatus.MALFORMED, detail=f"invalid build event: {e}")

    for _ in chunks:
        pass

    return extraction


def extract_image_id(stream) -> str:
    """Return the built image ID from a build response, or "" if none was found."""
    extraction = extract(stream)
    if extraction.status is ExtractionStatus.MALFORMED:
        logger.warning(f"Could not decode build result: {extraction.detail}")
    return extraction.image_id
