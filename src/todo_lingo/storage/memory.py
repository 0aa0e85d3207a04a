"""In-memory storage adapter."""

from todo_lingo.storage.base import StorageQuotaExceeded


class MemoryStorage:
    """Dict-backed storage.

    Used by tests and by callers that do not want anything on disk.
    An optional quota (in characters across all keys and values) makes
    writes fail the way a full browser local storage does.

    Example:
        >>> storage = MemoryStorage(quota=16)
        >>> storage.set("todos", "[]")
        >>> storage.get("todos")
        '[]'
    """

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        quota: int | None = None,
    ) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._quota = quota
        self.writes: list[str] = []

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            used = self.size() - self._entry_size(key)
            if used + len(key) + len(value) > self._quota:
                raise StorageQuotaExceeded(
                    f"Storage quota of {self._quota} exceeded writing '{key}'",
                    key=key,
                )
        self._data[key] = value
        self.writes.append(key)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def size(self) -> int:
        """Characters currently used by keys and values."""
        return sum(len(k) + len(v) for k, v in self._data.items())

    def keys(self) -> list[str]:
        return list(self._data)

    def _entry_size(self, key: str) -> int:
        if key not in self._data:
            return 0
        return len(key) + len(self._data[key])
