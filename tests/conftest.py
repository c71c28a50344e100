import io
import json
import tempfile

import pytest


def build_log(*events) -> bytes:
    """Encode events the way the daemon streams them: one JSON object per line."""
    return b"".join(json.dumps(event).encode() + b"\r\n" for event in events)


class ChunkedResponse:
    """Stand-in for a streaming requests.Response that records what was read."""

    def __init__(self, chunks):
        self._chunks = list(chunks)
        self.read_chunks = []
        self.closed = False

    def iter_content(self, chunk_size=None):
        for chunk in self._chunks:
            self.read_chunks.append(chunk)
            yield chunk

    def close(self):
        self.closed = True


@pytest.fixture
def log_stream():
    def make(*events):
        return io.BytesIO(build_log(*events))

    return make


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Point tempfile at a private directory so leftover staging dirs are visible."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def dockerfile(tmp_path):
    path = tmp_path / "Dockerfile.test"
    path.write_text("FROM busybox\nRUN echo hello\n")
    return path
