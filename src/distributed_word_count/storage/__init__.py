"""Storage backends for the object being scanned."""

from distributed_word_count.storage.base import StorageBackend, StorageError, read_exact
from distributed_word_count.storage.local import FileStorage, InMemoryStorage

__all__ = ["FileStorage", "InMemoryStorage", "StorageBackend", "StorageError", "read_exact"]
