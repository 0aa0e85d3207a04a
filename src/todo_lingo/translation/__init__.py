"""Task text translation.

Provides the supported language table, the persistent translation cache,
and the HTTP translation client.

Note: TranslationClient is lazy-loaded because it depends on the settings
module, which itself imports the language table from this package.
"""

from todo_lingo.translation.cache import CACHE_KEY, CacheEntry, TranslationCache
from todo_lingo.translation.languages import (
    SUPPORTED_LANGUAGES,
    is_supported,
    language_name,
)

_lazy_imports = {
    "TranslationClient": "todo_lingo.translation.client",
    "extract_translation": "todo_lingo.translation.client",
}


def __getattr__(name: str):
    """Lazy import for modules that depend on settings."""
    if name in _lazy_imports:
        import importlib

        module = importlib.import_module(_lazy_imports[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "CACHE_KEY",
    "CacheEntry",
    "TranslationCache",
    "TranslationClient",  # lazy
    "extract_translation",  # lazy
    "SUPPORTED_LANGUAGES",
    "is_supported",
    "language_name",
]
