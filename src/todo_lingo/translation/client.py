"""Translation client with a persistent cache and fallback.

Translates task text through the MyMemory public API. A fresh cache
entry short-circuits the request. Any failure returns the original
text, so callers never have to handle translation errors.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx

from todo_lingo.config import Settings, get_settings
from todo_lingo.logging import Loggers
from todo_lingo.storage.base import Storage
from todo_lingo.translation.cache import TranslationCache

logger = Loggers.translation()


def extract_translation(payload: Any) -> str | None:
    """Pull ``responseData.translatedText`` out of an API response body.

    Any other shape yields None; no further fields are interpreted.
    """
    if not isinstance(payload, dict):
        return None
    response_data = payload.get("responseData")
    if not isinstance(response_data, dict):
        return None
    translated = response_data.get("translatedText")
    if not isinstance(translated, str) or not translated:
        return None
    return translated


class TranslationClient:
    """Translates text, caching results for a week.

    Example:
        >>> client = TranslationClient(FileStorage(settings.storage_dir), settings)
        >>> await client.translate("Buy milk", "en", "es")
        'Comprar leche'
    """

    def __init__(
        self,
        storage: Storage,
        settings: Settings | None = None,
        *,
        cache: TranslationCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._cache = cache or TranslationCache(
            storage,
            ttl_seconds=self._settings.translation_cache_ttl_seconds,
            clock=clock,
        )
        self._transport = transport

    @property
    def cache(self) -> TranslationCache:
        return self._cache

    async def translate(
        self,
        text: str,
        source_lang: str | None = None,
        target_lang: str | None = None,
    ) -> str:
        """Translate text from source_lang to target_lang.

        Args:
            text: Text to translate; sent to the API as given.
            source_lang: Language of text (default from settings, "en").
            target_lang: Language to translate into (default from settings).

        Returns:
            The translation, or text unchanged if translation failed.
        """
        source_lang = source_lang or self._settings.default_source_language
        target_lang = target_lang or self._settings.default_target_language

        cache_key = TranslationCache.make_key(text, source_lang, target_lang)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("translation_cache_hit", key=cache_key)
            return cached

        try:
            payload = await self._request(text, source_lang, target_lang)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "translation_failed",
                status=e.response.status_code,
                source_lang=source_lang,
                target_lang=target_lang,
            )
            return text
        except httpx.HTTPError as e:
            logger.warning(
                "translation_failed",
                error=str(e) or type(e).__name__,
                source_lang=source_lang,
                target_lang=target_lang,
            )
            return text
        except ValueError as e:
            logger.warning("translation_response_malformed", error=str(e))
            return text

        translated = extract_translation(payload)
        if translated is None:
            logger.info("translation_missing_in_response", key=cache_key)
            translated = text

        self._cache.put(cache_key, translated)
        return translated

    def clear_cache(self) -> None:
        """Drop every cached translation. Never raises."""
        self._cache.clear()

    async def _request(self, text: str, source_lang: str, target_lang: str) -> Any:
        """Call the translation endpoint and return the decoded JSON body.

        Raises:
            httpx.HTTPError: Transport failure or non-2xx status.
            ValueError: Body is not valid JSON.
        """
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._settings.translation_timeout_seconds,
        ) as client:
            response = await client.get(
                self._settings.translation_api_url,
                params={"q": text, "langpair": f"{source_lang}|{target_lang}"},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            return response.json()
