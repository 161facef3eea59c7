"""Token counting over partitions of the object."""

from distributed_word_count.text.process_partition import process_partition
from distributed_word_count.text.tokens import count_tokens, max_tokens_per_line

__all__ = ["count_tokens", "max_tokens_per_line", "process_partition"]
