"""Persistent task store.

Holds the ordered task list in memory and mirrors the whole list to a
storage port under the ``todos`` key after every mutation. Storage
failures are logged and swallowed: the in-memory list stays authoritative.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Callable

from todo_lingo.logging import Loggers
from todo_lingo.storage.base import Storage, StorageError
from todo_lingo.tasks.models import Task

logger = Loggers.store()

TODOS_KEY = "todos"

Listener = Callable[[list[Task]], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class TaskStore:
    """Ordered, persistent task list.

    Callers only ever get copies of tasks; the store's own instances are
    changed exclusively through its methods.

    Lookups by unknown id are no-ops that return False. Whether such a
    call still writes the (unchanged) list is controlled by
    ``persist_on_miss``; the default writes, matching the browser version
    of the app.

    Example:
        >>> store = TaskStore(MemoryStorage())
        >>> task = store.add("Buy milk")
        >>> store.toggle(task.id)
        True
        >>> store.completed_count
        1
        >>> store.clear_completed()
        1
    """

    def __init__(
        self,
        storage: Storage,
        *,
        persist_on_miss: bool = True,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._storage = storage
        self._persist_on_miss = persist_on_miss
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_id
        self._items: list[Task] = []
        self._listeners: list[Listener] = []

    # -------------------- persistence --------------------

    def load(self) -> list[Task]:
        """Replace the in-memory list with the persisted one.

        Missing data gives an empty list. Unreadable or malformed data also
        gives an empty list; the stored value is left as it is.

        Returns:
            Copies of the loaded tasks.
        """
        self._items = self._read()
        self._notify()
        return self.tasks

    def _read(self) -> list[Task]:
        try:
            raw = self._storage.get(TODOS_KEY)
        except StorageError as e:
            logger.error("todos_load_failed", error=str(e))
            return []
        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"Expected a list of tasks, got {type(data).__name__}")
            items = [Task.from_dict(record) for record in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("todos_load_failed", error=str(e))
            return []

        if len({item.id for item in items}) != len(items):
            logger.error("todos_load_failed", error="duplicate task ids")
            return []

        logger.debug("todos_loaded", count=len(items))
        return items

    def _save(self) -> None:
        payload = json.dumps([item.to_dict() for item in self._items])
        try:
            self._storage.set(TODOS_KEY, payload)
        except StorageError as e:
            logger.error("todos_save_failed", error=str(e), count=len(self._items))

    def _commit(self) -> None:
        self._save()
        self._notify()

    def _miss(self, operation: str, task_id: str) -> bool:
        logger.debug("task_not_found", operation=operation, task_id=task_id)
        if self._persist_on_miss:
            self._commit()
        return False

    # -------------------- observers --------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every change.

        The listener is called once straight away with the current list.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)
        listener(self.tasks)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        for listener in list(self._listeners):
            listener(self.tasks)

    # -------------------- mutations --------------------

    def add(self, text: str) -> Task | None:
        """Append a new task.

        Args:
            text: Task text; surrounding whitespace is stripped.

        Returns:
            Copy of the created task, or None if the text was blank.
        """
        trimmed = text.strip()
        if not trimmed:
            return None

        item = Task(
            id=self._allocate_id(),
            text=trimmed,
            completed=False,
            created_at=self._clock(),
        )
        self._items.append(item)
        self._commit()
        logger.debug("task_added", task_id=item.id)
        return item.copy()

    def toggle(self, task_id: str) -> bool:
        """Flip the completed flag of a task.

        Returns:
            True if the task exists.
        """
        item = self._find(task_id)
        if item is None:
            return self._miss("toggle", task_id)
        item.completed = not item.completed
        self._commit()
        return True

    def delete(self, task_id: str) -> bool:
        """Remove a task.

        Returns:
            True if the task existed.
        """
        item = self._find(task_id)
        if item is None:
            return self._miss("delete", task_id)
        self._items.remove(item)
        self._commit()
        return True

    def clear_completed(self) -> int:
        """Remove every completed task, keeping the order of the rest.

        Returns:
            Number of tasks removed.
        """
        remaining = [item for item in self._items if not item.completed]
        removed = len(self._items) - len(remaining)
        self._items = remaining
        self._commit()
        return removed

    def annotate_translation(
        self, task_id: str, language: str, translated_text: str
    ) -> bool:
        """Set the translation of a task for one language.

        Other languages already on the task are kept; an existing entry for
        the same language is overwritten.

        Returns:
            True if the task exists.
        """
        item = self._find(task_id)
        if item is None:
            return self._miss("annotate_translation", task_id)
        item.translations[language] = translated_text
        self._commit()
        return True

    # -------------------- queries --------------------

    @property
    def tasks(self) -> list[Task]:
        """Copies of all tasks, in insertion order."""
        return [item.copy() for item in self._items]

    def get(self, task_id: str) -> Task | None:
        """Copy of a task by id."""
        item = self._find(task_id)
        return item.copy() if item is not None else None

    @property
    def active_count(self) -> int:
        """Number of incomplete tasks."""
        return sum(1 for item in self._items if not item.completed)

    @property
    def completed_count(self) -> int:
        """Number of completed tasks."""
        return sum(1 for item in self._items if item.completed)

    def __len__(self) -> int:
        return len(self._items)

    def _find(self, task_id: str) -> Task | None:
        for item in self._items:
            if item.id == task_id:
                return item
        return None

    def _allocate_id(self) -> str:
        existing = {item.id for item in self._items}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id
