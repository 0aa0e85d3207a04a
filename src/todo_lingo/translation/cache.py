"""Time-boxed translation cache kept in the storage port.

The whole cache is one JSON object under the ``translationCache`` key,
mapping ``source-target-normalized text`` to
``{"translation": ..., "timestamp": <ms since epoch>}``.
Expired entries are ignored on read and overwritten on the next write
for the same key; nothing is purged proactively.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Callable

from todo_lingo.logging import Loggers
from todo_lingo.storage.base import Storage, StorageError

logger = Loggers.translation()

CACHE_KEY = "translationCache"
DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60


@dataclass
class CacheEntry:
    """A cached translation."""

    translation: str
    timestamp: int  # milliseconds since epoch

    def to_dict(self) -> dict[str, Any]:
        return {"translation": self.translation, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: Any) -> "CacheEntry | None":
        """Parse a stored record, or None if it is malformed."""
        if not isinstance(data, dict):
            return None
        translation = data.get("translation")
        timestamp = data.get("timestamp")
        if not isinstance(translation, str):
            return None
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        return cls(translation=translation, timestamp=int(timestamp))


class TranslationCache:
    """Persistent translation cache with expiry.

    Example:
        >>> cache = TranslationCache(MemoryStorage())
        >>> key = TranslationCache.make_key("  Hello WORLD ", "en", "es")
        >>> key
        'en-es-hello world'
        >>> cache.put(key, "hola mundo")
        >>> cache.get(key)
        'hola mundo'
    """

    def __init__(
        self,
        storage: Storage,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._storage = storage
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock or time.time

    @staticmethod
    def make_key(text: str, source_lang: str, target_lang: str) -> str:
        """Derive the cache key for a translation request."""
        normalized = text.strip().lower()
        return f"{source_lang}-{target_lang}-{normalized}"

    def now_ms(self) -> int:
        return round(self._clock() * 1000)

    def get(self, key: str) -> str | None:
        """Cached translation for key, or None if absent or expired."""
        entry = self.entries().get(key)
        if entry is None:
            return None
        if self.now_ms() - entry.timestamp > self._ttl_ms:
            logger.debug("translation_cache_expired", key=key)
            return None
        return entry.translation

    def put(self, key: str, translation: str) -> None:
        """Store a translation stamped with the current time.

        Write failures are logged, never raised.
        """
        cache = self._read_raw()
        cache[key] = CacheEntry(translation=translation, timestamp=self.now_ms()).to_dict()
        try:
            self._storage.set(CACHE_KEY, json.dumps(cache))
        except StorageError as e:
            logger.error("translation_cache_write_failed", key=key, error=str(e))

    def entries(self) -> dict[str, CacheEntry]:
        """All well-formed entries, expired ones included."""
        entries: dict[str, CacheEntry] = {}
        for key, record in self._read_raw().items():
            entry = CacheEntry.from_dict(record)
            if entry is not None:
                entries[key] = entry
        return entries

    def clear(self) -> None:
        """Remove the whole cache. Failures are logged, never raised."""
        try:
            self._storage.remove(CACHE_KEY)
        except StorageError as e:
            logger.error("translation_cache_clear_failed", error=str(e))
            return
        logger.info("translation_cache_cleared")

    def _read_raw(self) -> dict[str, Any]:
        try:
            raw = self._storage.get(CACHE_KEY)
        except StorageError as e:
            logger.error("translation_cache_read_failed", error=str(e))
            return {}
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("translation_cache_malformed", error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("translation_cache_malformed", error="not a JSON object")
            return {}
        return data
