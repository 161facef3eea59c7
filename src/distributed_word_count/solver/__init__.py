"""Dispatch and reduction of partition work."""

from distributed_word_count.solver.aggregate import AggregateStats, PartialResult, fold_results
from distributed_word_count.solver.solve import (
    DistributedWordCount,
    WordCountError,
    main_solve,
    solve,
)

__all__ = [
    "AggregateStats",
    "DistributedWordCount",
    "PartialResult",
    "WordCountError",
    "fold_results",
    "main_solve",
    "solve",
]
