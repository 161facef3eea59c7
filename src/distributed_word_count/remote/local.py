"""In-process executor standing in for a pool of remote nodes."""

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from distributed_word_count.partition.types import MAX_NODES
from distributed_word_count.remote.base import InvalidNodeError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class LocalRemoteExecutor:
    """
    Run units of work in the calling thread as if on node 1..num_nodes.

    startup_delay (seconds) is slept before every unit of work to model the
    cost of starting a job on a remote node.
    """

    def __init__(self, num_nodes: int = MAX_NODES, startup_delay: float = 0.0):
        if num_nodes < 1:
            raise ValueError(f"num_nodes must be at least 1, got {num_nodes}")
        self.num_nodes = num_nodes
        self.startup_delay = startup_delay

    def run(self, node_id: int, func: Callable[[], T]) -> T:
        if node_id < 1 or node_id > self.num_nodes:
            raise InvalidNodeError(f"Invalid node id: {node_id} (valid: 1..{self.num_nodes})")

        if self.startup_delay > 0:
            time.sleep(self.startup_delay)

        logger.debug("Node %d: running %r", node_id, func)
        return func()

    def __repr__(self) -> str:
        return f"LocalRemoteExecutor(num_nodes={self.num_nodes}, startup_delay={self.startup_delay})"
