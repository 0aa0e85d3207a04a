"""Key-value storage port.

Everything todo-lingo persists goes through this interface: string keys,
string values. The task store and the translation cache each own one key.
"""

from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Raised by storage adapters when a read, write, or removal fails."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the storage capacity."""


@runtime_checkable
class Storage(Protocol):
    """String key-value store.

    Implementations raise StorageError (never bare OSError) on failure.
    """

    def get(self, key: str) -> str | None:
        """Return the value for key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        ...
