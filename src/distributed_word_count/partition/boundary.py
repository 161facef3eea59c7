"""Line-boundary correction for partitions that start mid-object."""

from distributed_word_count.partition.types import SCAN_BUFFER_SIZE
from distributed_word_count.storage.base import StorageBackend

LINE_TERMINATORS = b"\n\r"


def find_next_line_start(
    storage: StorageBackend,
    offset: int,
    total_length: int,
    buffer_size: int = SCAN_BUFFER_SIZE,
) -> int:
    """
    Return the offset just past the first line terminator at or after offset.

    Only the vicinity of the boundary is scanned, in chunks of at most
    buffer_size bytes and never past total_length. If no terminator is found
    the original offset is returned unchanged.

    I/O errors are not handled here; the caller decides what a failed
    boundary check means for its partition.
    """
    position = offset

    with storage.open_stream(offset) as stream:
        while position < total_length:
            chunk = stream.read(min(buffer_size, total_length - position))
            if not chunk:
                break

            for i, byte in enumerate(chunk):
                if byte in LINE_TERMINATORS:
                    return position + i + 1

            position += len(chunk)

    return offset
