"""Local storage backends: a file on disk and an in-memory byte object."""

import io
import os
import time
from pathlib import Path
from typing import BinaryIO

from distributed_word_count.storage.base import check_offset

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


class FileStorage:
    """Storage backed by a local file. Each stream gets its own file handle."""

    def __init__(self, path: str | os.PathLike[str]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def length(self) -> int:
        return self._path.stat().st_size

    def open_stream(self, offset: int) -> BinaryIO:
        check_offset(offset, self.length())
        handle = open(self._path, "rb", buffering=BUFFER_SIZE)  # noqa: SIM115
        try:
            handle.seek(offset)
        except OSError:
            handle.close()
            raise
        return handle

    def __repr__(self) -> str:
        return f"FileStorage({str(self._path)!r})"


class InMemoryStorage:
    """
    Storage backed by an immutable bytes object.

    latency (seconds) is slept on every length() and open_stream() call to
    mimic a remote filesystem round trip.
    """

    def __init__(self, data: bytes, latency: float = 0.0):
        self._data = bytes(data)
        self._latency = latency

    def _wait(self) -> None:
        if self._latency > 0:
            time.sleep(self._latency)

    def length(self) -> int:
        self._wait()
        return len(self._data)

    def open_stream(self, offset: int) -> BinaryIO:
        self._wait()
        check_offset(offset, len(self._data))
        # BytesIO shares the bytes buffer until written to, so no copy is made.
        stream = io.BytesIO(self._data)
        stream.seek(offset)
        return stream

    def __repr__(self) -> str:
        return f"InMemoryStorage(<{len(self._data)} bytes>, latency={self._latency})"
