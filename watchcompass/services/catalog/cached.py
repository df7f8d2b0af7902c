"""Caching decorator over any movie catalog.

Keys are built from the operation name and normalized arguments, so queries
differing only by case or surrounding whitespace share one entry:

- ``search:<lowercased trimmed query>``
- ``details:<id>``
- ``providers:<id>:<uppercased trimmed country>``
- ``similar:<id>``
- ``genres``

Store failures never reach the caller: a failed read is a miss and a failed
write is logged and dropped. Concurrent misses for the same key are not
coalesced; each calls through to the inner catalog.
"""

from datetime import timedelta
from typing import Any, TypeVar

from pydantic import TypeAdapter

from watchcompass.config import CatalogCacheOptions
from watchcompass.constants import GENRES_CACHE_KEY
from watchcompass.models.movie import MovieCard, MovieDetails
from watchcompass.services.catalog.base import MovieCatalog
from watchcompass.utils.cache import CacheStore
from watchcompass.utils.logging import get_logger
from watchcompass.utils.metrics import metrics

logger = get_logger(__name__)

T = TypeVar("T")

_CARDS = TypeAdapter(list[MovieCard])
_DETAILS = TypeAdapter(MovieDetails)
_NAMES = TypeAdapter(list[str])


class CachedMovieCatalog:
    """Movie catalog that memoizes another catalog's results in a cache store."""

    def __init__(
        self,
        inner: MovieCatalog,
        store: CacheStore,
        options: CatalogCacheOptions | None = None,
    ) -> None:
        self._inner = inner
        self._store = store
        self._options = options or CatalogCacheOptions()

    @property
    def inner(self) -> MovieCatalog:
        return self._inner

    @property
    def store(self) -> CacheStore:
        return self._store

    async def search(self, query: str) -> list[MovieCard]:
        if not query or not query.strip():
            return []

        key = f"search:{query.strip().lower()}"
        cached = await self._read(key, _CARDS, "search")
        if cached is not None:
            return cached

        result = await self._inner.search(query)
        await self._write(key, result, _CARDS, self._options.search_ttl)
        return result

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        if movie_id <= 0:
            return None

        key = f"details:{movie_id}"
        cached = await self._read(key, _DETAILS, "details")
        if cached is not None:
            return cached

        result = await self._inner.get_details(movie_id)
        if result is not None:
            await self._write(key, result, _DETAILS, self._options.details_ttl)
        return result

    async def get_watch_providers(self, movie_id: int, country_code: str) -> list[str]:
        if movie_id <= 0:
            return []

        country = (country_code or "").strip().upper()
        key = f"providers:{movie_id}:{country}"
        cached = await self._read(key, _NAMES, "providers")
        if cached is not None:
            return cached

        result = await self._inner.get_watch_providers(movie_id, country_code)
        await self._write(key, result, _NAMES, self._options.providers_ttl)
        return result

    async def get_genres(self) -> list[str]:
        cached = await self._read(GENRES_CACHE_KEY, _NAMES, "genres")
        if cached is not None:
            return cached

        result = await self._inner.get_genres()
        await self._write(GENRES_CACHE_KEY, result, _NAMES, self._options.genres_ttl)
        return result

    async def get_similar(self, movie_id: int) -> list[MovieCard]:
        if movie_id <= 0:
            return []

        key = f"similar:{movie_id}"
        cached = await self._read(key, _CARDS, "similar")
        if cached is not None:
            return cached

        result = await self._inner.get_similar(movie_id)
        await self._write(key, result, _CARDS, self._options.similar_ttl)
        return result

    async def _read(self, key: str, adapter: TypeAdapter[T], operation: str) -> T | None:
        try:
            raw: Any = await self._store.get(key)
            value = adapter.validate_python(raw) if raw is not None else None
        except Exception as e:
            logger.warning(f"Cache read failed for {key}, treating as miss: {e}")
            value = None

        result = "hit" if value is not None else "miss"
        metrics.catalog_cache_requests_total.inc(operation=operation, result=result)
        return value

    async def _write(self, key: str, value: T, adapter: TypeAdapter[T], ttl: timedelta) -> None:
        if ttl <= timedelta(0):
            return
        try:
            await self._store.set(key, adapter.dump_python(value, mode="json"), ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")
