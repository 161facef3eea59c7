"""Byte-range planning over the whole object."""

from distributed_word_count.partition.types import MAX_NODES, Partition


def plan_partitions(total_length: int, num_nodes: int) -> list[Partition]:
    """
    Split [0, total_length) into exactly num_nodes contiguous partitions.

    Every partition gets total_length // num_nodes bytes; the last one also
    absorbs the remainder so its end is always total_length. When the object
    is shorter than the node count, the leading partitions are empty.
    """
    if num_nodes < 1 or num_nodes > MAX_NODES:
        raise ValueError(f"num_nodes must be between 1 and {MAX_NODES}, got {num_nodes}")
    if total_length < 0:
        raise ValueError(f"total_length must be non-negative, got {total_length}")

    size = total_length // num_nodes
    partitions = []
    for i in range(num_nodes):
        start = i * size
        end = total_length if i == num_nodes - 1 else start + size
        partitions.append(Partition(index=i, start=start, end=end))

    return partitions
