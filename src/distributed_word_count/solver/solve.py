import logging
import os
import time
from collections.abc import Callable, Iterator
from concurrent.futures import as_completed
from functools import partial
from pathlib import Path

from distributed_word_count.partition import MAX_NODES, Partition, plan_partitions
from distributed_word_count.remote import LocalRemoteExecutor, RemoteExecutor
from distributed_word_count.solver.aggregate import PartialResult, fold_results
from distributed_word_count.solver.execution import (
    WC_EXECUTOR_ENV,
    ExecutorClass,
    get_executor_class,
    get_policy_name,
)
from distributed_word_count.storage import FileStorage, StorageBackend
from distributed_word_count.text import process_partition

logger = logging.getLogger(__name__)


class WordCountError(RuntimeError):
    """Raised when the run cannot produce any answer at all."""


def run_partition(
    remote: RemoteExecutor,
    storage: StorageBackend,
    partition: Partition,
    total_length: int,
) -> int:
    """Run one partition's unit of work on its node and wait for the result."""
    work = partial(process_partition, storage, partition, total_length)
    return remote.run(partition.node_id, work)


def capture_result(partition: Partition, compute: Callable[[], int]) -> PartialResult:
    """Call compute and wrap its value, or the exception it raised, for partition."""
    try:
        value = compute()
    except Exception as exc:
        return PartialResult(partition.index, error=exc)
    return PartialResult(partition.index, max_tokens=value)


class DistributedWordCount:
    """
    Find the maximum number of tokens on any line of a storage object.

    The object is cut into num_nodes byte ranges, one per node. Each range is
    sent to its node through the remote executor, and the per-node maxima are
    folded into one answer. A failing partition only loses its own
    contribution.
    """

    def __init__(
        self,
        storage: StorageBackend,
        remote: RemoteExecutor,
        num_nodes: int = MAX_NODES,
    ):
        if num_nodes < 1 or num_nodes > MAX_NODES:
            raise ValueError(f"num_nodes must be between 1 and {MAX_NODES}, got {num_nodes}")
        self._storage = storage
        self._remote = remote
        self._num_nodes = num_nodes

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    def compute_max_tokens_per_line(self) -> int:
        """
        Run the full plan/dispatch/reduce pipeline and return the result.

        Raises WordCountError only if the object length cannot be read.
        """
        total_start = time.perf_counter()

        try:
            total_length = self._storage.length()
        except OSError as exc:
            raise WordCountError("Error finding max words per line: length query failed") from exc

        partitions = plan_partitions(total_length, self._num_nodes)

        executor_class = get_executor_class()
        executor_name = get_policy_name()
        executor_override = os.environ.get(WC_EXECUTOR_ENV, "")
        override_info = f", WC_EXECUTOR={executor_override}" if executor_override else ""

        logger.info(
            f"Starting: storage={self._storage!r}, length={total_length}, nodes={self._num_nodes}, "
            f"executor={executor_name}{override_info}"
        )

        results = self._dispatch(partitions, total_length, executor_class)
        best, stats = fold_results(results, expected=len(partitions))

        if stats.failed > 0:
            logger.warning(
                "%d of %d partitions failed; result covers the remaining partitions",
                stats.failed,
                stats.partitions,
            )

        total_time = time.perf_counter() - total_start
        logger.info(
            "Result: %d max tokens per line (%d partitions, %d empty, total %.2fs)",
            best,
            stats.partitions,
            stats.empty,
            total_time,
        )
        return best

    def _dispatch(
        self,
        partitions: list[Partition],
        total_length: int,
        executor_class: ExecutorClass,
    ) -> Iterator[PartialResult]:
        """Yield one PartialResult per partition, in completion order."""
        if executor_class is None:
            for partition in partitions:
                work = partial(run_partition, self._remote, self._storage, partition, total_length)
                yield capture_result(partition, work)
            return

        # One slot per partition: every slot blocks on its remote call.
        with executor_class(max_workers=len(partitions)) as executor:
            futures = {
                executor.submit(run_partition, self._remote, self._storage, partition, total_length): partition
                for partition in partitions
            }
            for future in as_completed(futures):
                yield capture_result(futures[future], future.result)


def solve(
    input_path: str,
    nodes: int = MAX_NODES,
    startup_delay: float = 0.0,
) -> int:
    """
    Find the maximum number of tokens per line in a local file.

    Args:
        input_path: Path to the input text file.
        nodes: Number of nodes (and partitions), 1..MAX_NODES.
        startup_delay: Simulated per-call node startup time in seconds.

    Returns:
        The maximum token count on any line, 0 for an empty file.
    """
    storage = FileStorage(Path(input_path).resolve())
    remote = LocalRemoteExecutor(num_nodes=nodes, startup_delay=startup_delay)
    job = DistributedWordCount(storage, remote, num_nodes=nodes)
    return job.compute_max_tokens_per_line()


def main_solve(input_path: str, nodes: int = MAX_NODES, startup_delay: float = 0.0) -> None:
    """Main entry point that prints result to stdout."""
    result = solve(input_path, nodes=nodes, startup_delay=startup_delay)
    print(result)
