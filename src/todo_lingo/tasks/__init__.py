"""Task management.

Provides the persistent, ordered task list and its data model.

Example:
    >>> store = TaskStore(MemoryStorage())
    >>> task = store.add("Buy milk")
    >>> store.toggle(task.id)
    >>> store.clear_completed()
"""

from todo_lingo.tasks.models import Task
from todo_lingo.tasks.store import TODOS_KEY, TaskStore

__all__ = ["Task", "TaskStore", "TODOS_KEY"]
