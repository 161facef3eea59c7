"""Storage port: the read-only byte object the pipeline works on."""

from typing import BinaryIO, Protocol, runtime_checkable


class StorageError(OSError):
    """Raised when the storage backend cannot deliver the requested bytes."""


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for read-only, byte-addressable storage objects."""

    def length(self) -> int:
        """Total object length in bytes. Stable across calls within one run."""
        ...

    def open_stream(self, offset: int) -> BinaryIO:
        """Open a stream running from offset to end-of-object.

        offset == length() yields an empty stream; offsets outside
        [0, length()] raise ValueError.
        """
        ...


def check_offset(offset: int, total_length: int) -> None:
    """Validate a stream offset against the object length."""
    if offset < 0 or offset > total_length:
        raise ValueError(f"offset {offset} outside object of length {total_length}")


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly size bytes from stream, raising StorageError on a short read."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    if remaining > 0:
        raise StorageError(f"short read: expected {size} bytes, got {size - remaining}")
    return b"".join(chunks)
