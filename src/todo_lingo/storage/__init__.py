"""Key-value storage port and its adapters."""

from todo_lingo.storage.base import Storage, StorageError, StorageQuotaExceeded
from todo_lingo.storage.file import FileStorage
from todo_lingo.storage.memory import MemoryStorage

__all__ = [
    "Storage",
    "StorageError",
    "StorageQuotaExceeded",
    "FileStorage",
    "MemoryStorage",
]
