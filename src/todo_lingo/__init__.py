"""todo-lingo - a local task list with machine translation of task text.

This package provides:

- TaskStore: the ordered task list, mirrored to a storage port on every change
- TranslationClient: cached, fail-safe translation through the MyMemory API
- Storage adapters: in-memory and file-backed key-value storage
- A small REPL (``todo-lingo``) tying the two together

The store and the translation client are independent; translate_tasks
composes them.
"""

from todo_lingo.config import (
    Settings,
    SettingsContext,
    SettingsValidationError,
    get_settings,
    reload_settings,
    set_settings,
    validate_settings,
)
from todo_lingo.service import translate_tasks
from todo_lingo.storage import (
    FileStorage,
    MemoryStorage,
    Storage,
    StorageError,
    StorageQuotaExceeded,
)
from todo_lingo.tasks import Task, TaskStore
from todo_lingo.translation import (
    SUPPORTED_LANGUAGES,
    CacheEntry,
    TranslationCache,
)
from todo_lingo.translation.client import TranslationClient

__all__ = [
    # Tasks
    "Task",
    "TaskStore",
    # Translation
    "TranslationClient",
    "TranslationCache",
    "CacheEntry",
    "SUPPORTED_LANGUAGES",
    "translate_tasks",
    # Storage
    "Storage",
    "StorageError",
    "StorageQuotaExceeded",
    "FileStorage",
    "MemoryStorage",
    # Settings
    "Settings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "reload_settings",
    "validate_settings",
]

__version__ = "0.1.0"
