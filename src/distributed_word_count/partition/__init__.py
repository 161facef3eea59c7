"""Partition planning and boundary correction."""

from distributed_word_count.partition.boundary import find_next_line_start
from distributed_word_count.partition.plan import plan_partitions
from distributed_word_count.partition.types import MAX_NODES, SCAN_BUFFER_SIZE, Partition

__all__ = [
    "MAX_NODES",
    "SCAN_BUFFER_SIZE",
    "Partition",
    "find_next_line_start",
    "plan_partitions",
]
