"""Reduction of per-partition results into a single maximum."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PartialResult:
    """Outcome of one partition: either a token count or the error it raised."""

    partition_index: int
    max_tokens: int | None = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class AggregateStats:
    """Statistics from a fold_results operation."""

    partitions: int = 0
    failed: int = 0
    empty: int = 0


def fold_results(
    results: Iterable[PartialResult],
    expected: int,
) -> tuple[int, AggregateStats]:
    """
    Fold partial results with max, seeded at 0.

    Failed partitions are logged and contribute nothing. Every result is
    consumed, in whatever order they arrive.

    Returns:
        Tuple of (maximum token count, aggregation statistics).
    """
    best = 0
    stats = AggregateStats()

    for result in results:
        stats.partitions += 1

        if result.failed:
            stats.failed += 1
            logger.warning(
                "Error processing partition %d: %s",
                result.partition_index,
                result.error,
            )
            continue

        if not result.max_tokens:
            stats.empty += 1
            continue

        if result.max_tokens > best:
            best = result.max_tokens
            logger.debug("New best: %d (partition %d)", best, result.partition_index)

    if stats.partitions != expected:
        logger.error("Expected %d partition results, got %d", expected, stats.partitions)

    return best, stats
