"""Per-partition worker: correct the boundary, read the span, count tokens."""

import logging

from distributed_word_count.partition.boundary import find_next_line_start
from distributed_word_count.partition.types import Partition
from distributed_word_count.storage.base import StorageBackend, read_exact
from distributed_word_count.text.tokens import max_tokens_per_line

logger = logging.getLogger(__name__)


def resolve_read_start(
    storage: StorageBackend,
    partition: Partition,
    total_length: int,
) -> int:
    """
    Return where this partition should start reading.

    Partitions that begin strictly inside the object skip the (possibly
    partial) line they start in; it belongs to the previous partition.
    """
    if 0 < partition.start < total_length:
        return find_next_line_start(storage, partition.start, total_length)
    return partition.start


def process_partition(
    storage: StorageBackend,
    partition: Partition,
    total_length: int,
) -> int:
    """
    Find the maximum number of tokens on any line of one partition.

    A failed boundary check is a soft failure: it is logged and the
    partition contributes 0. Failures while reading the corrected span
    propagate to the caller.

    A line that begins inside the span but ends beyond it is counted using
    only the bytes in the span.
    """
    try:
        read_start = resolve_read_start(storage, partition, total_length)
    except OSError as exc:
        logger.warning("Node %d failed boundary check: %s", partition.node_id, exc)
        return 0

    bytes_to_read = min(partition.end, total_length) - read_start
    if bytes_to_read <= 0:
        logger.debug("Node %d: nothing to read after boundary correction", partition.node_id)
        return 0

    with storage.open_stream(read_start) as stream:
        data = read_exact(stream, bytes_to_read)

    result = max_tokens_per_line(data)
    logger.debug(
        "Node %d: read [%d, %d), max tokens %d",
        partition.node_id,
        read_start,
        read_start + bytes_to_read,
        result,
    )
    return result
