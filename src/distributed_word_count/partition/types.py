"""Shared constants and metadata structures for partitioning."""

from dataclasses import dataclass

# Hard ceiling on the number of compute nodes (node ids are 1..MAX_NODES).
MAX_NODES = 100

# Boundary scans read at most this many bytes per chunk.
SCAN_BUFFER_SIZE = 1024


@dataclass(frozen=True, slots=True)
class Partition:
    """A contiguous byte range [start, end) of the object assigned to one node."""

    index: int
    start: int
    end: int

    @property
    def node_id(self) -> int:
        return self.index + 1

    @property
    def size(self) -> int:
        return self.end - self.start
