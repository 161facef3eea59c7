"""Execution port: run a unit of work on a numbered compute node."""

from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


class InvalidNodeError(ValueError):
    """Raised when a node id falls outside the executor's valid range."""


@runtime_checkable
class RemoteExecutor(Protocol):
    """Protocol for executors that run zero-argument callables on a node."""

    def run(self, node_id: int, func: Callable[[], T]) -> T:
        """Run func on node node_id and return its result.

        Raises InvalidNodeError for an unknown node id; any exception raised
        by func propagates to the caller.
        """
        ...
