"""File-backed storage adapter.

One file per key under a directory, written atomically, so a crash
mid-write never leaves a half-written task list behind.
"""

from pathlib import Path

from todo_lingo.logging import Loggers
from todo_lingo.storage._utils import atomic_write_text, sanitize_filename
from todo_lingo.storage.base import StorageError

logger = Loggers.storage()


class FileStorage:
    """Persistent key-value storage in a directory.

    Example:
        >>> storage = FileStorage(settings.storage_dir)
        >>> storage.set("todos", "[]")
        >>> (settings.storage_dir / "todos.json").exists()
        True
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File holding the value for key."""
        return self._directory / f"{sanitize_filename(key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read '{key}': {e}", key=key) from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            atomic_write_text(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write '{key}': {e}", key=key) from e
        logger.debug("storage_write", key=key, path=str(path), size=len(value))

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}': {e}", key=key) from e
