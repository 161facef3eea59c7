"""Executors that run partition work on compute nodes."""

from distributed_word_count.remote.base import InvalidNodeError, RemoteExecutor
from distributed_word_count.remote.local import LocalRemoteExecutor

__all__ = ["InvalidNodeError", "LocalRemoteExecutor", "RemoteExecutor"]
