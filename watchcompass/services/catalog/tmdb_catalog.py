"""TMDB implementation of the movie catalog contract.

Maps raw TMDB payloads into catalog values:

- runtime 0 or missing becomes unknown
- genre and provider names are trimmed and deduplicated case-insensitively
- image paths become absolute URLs (poster w500, backdrop w780)
- the release year is the leading 4 digits of the release date
"""

from collections.abc import Iterable, Mapping

import httpx

from watchcompass.config import Settings, TmdbOptions
from watchcompass.constants import (
    TMDB_BACKDROP_SIZE,
    TMDB_IMAGE_BASE_URL,
    TMDB_POSTER_SIZE,
)
from watchcompass.models.movie import MovieCard, MovieDetails
from watchcompass.services.catalog.executor import TmdbRequestExecutor
from watchcompass.services.catalog.genre_cache import GenreLookupCache
from watchcompass.services.catalog.tmdb_api import TmdbApiClient, normalize_country
from watchcompass.services.catalog.tmdb_responses import (
    TmdbMovieListResponse,
    TmdbProviderCountry,
)
from watchcompass.utils.http_client import get_tmdb_client
from watchcompass.utils.logging import get_logger
from watchcompass.utils.metrics import metrics
from watchcompass.utils.retry import RetryConfig

logger = get_logger(__name__)


def normalize_runtime(runtime: int | None) -> int | None:
    """Return the runtime in minutes, or None when unknown."""
    if runtime is None or runtime <= 0:
        return None
    return runtime


def clean_names(names: Iterable[str | None]) -> list[str]:
    """Trim names, drop blanks and case-insensitive duplicates, keep first-seen order."""
    seen: set[str] = set()
    result = []
    for name in names:
        if not name or not name.strip():
            continue
        trimmed = name.strip()
        key = trimmed.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(trimmed)
    return result


def image_url(path: str | None, size: str) -> str | None:
    """Build an absolute TMDB image URL from a relative file path."""
    if not path or not path.strip():
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}/{path.strip().lstrip('/')}"


def release_year(release_date: str | None) -> int | None:
    """Extract the year from a ``YYYY-MM-DD`` date string."""
    if not release_date:
        return None
    year = release_date.strip()[:4]
    if len(year) != 4 or not year.isdigit():
        return None
    return int(year)


def select_provider_country(
    results: Mapping[str, TmdbProviderCountry],
    country_code: str,
) -> TmdbProviderCountry | None:
    """Pick the entry for a country, else the first country by code."""
    if not results:
        return None
    if country_code in results:
        return results[country_code]
    first_key = min(results, key=lambda key: key.upper())
    return results[first_key]


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TmdbMovieCatalog:
    """Movie catalog backed by the TMDB v3 API."""

    def __init__(
        self,
        api: TmdbApiClient,
        options: TmdbOptions,
        genre_cache: GenreLookupCache | None = None,
    ) -> None:
        self._api = api
        self._options = options
        self._genre_cache = genre_cache or GenreLookupCache(self._load_genre_lookup)

    @property
    def genre_cache(self) -> GenreLookupCache:
        return self._genre_cache

    async def search(self, query: str) -> list[MovieCard]:
        if _blank(query):
            return []

        self._api.ensure_configured()
        trimmed = query.strip()
        metrics.catalog_calls_total.inc(operation="search")
        try:
            response = await self._api.search_movies(trimmed)
            return await self._map_movie_list(response)
        except Exception as e:
            logger.warning(f"TMDB search failed for query {trimmed!r}: {e}")
            raise

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        if movie_id <= 0:
            return None

        self._api.ensure_configured()
        metrics.catalog_calls_total.inc(operation="details")
        try:
            response = await self._api.get_movie_details(movie_id)
        except Exception as e:
            logger.warning(f"TMDB movie details failed for {movie_id}: {e}")
            raise

        if response.id <= 0 or _blank(response.title):
            return None

        return MovieDetails(
            movie_id=response.id,
            title=response.title.strip(),
            runtime_minutes=normalize_runtime(response.runtime) or 0,
            genres=tuple(clean_names(genre.name for genre in response.genres)),
            poster_url=image_url(response.poster_path, TMDB_POSTER_SIZE),
            backdrop_url=image_url(response.backdrop_path, TMDB_BACKDROP_SIZE),
            release_year=release_year(response.release_date),
            overview=(response.overview or "").strip() or None,
        )

    async def get_watch_providers(self, movie_id: int, country_code: str) -> list[str]:
        if movie_id <= 0:
            return []

        self._api.ensure_configured()
        country = normalize_country(country_code, self._options.default_country_code)
        metrics.catalog_calls_total.inc(operation="providers")
        try:
            response = await self._api.get_watch_providers(movie_id, country)
        except Exception as e:
            logger.warning(f"TMDB watch providers failed for {movie_id}: {e}")
            raise

        selected = select_provider_country(response.results, country)
        if selected is None:
            return []

        providers = [*selected.flatrate, *selected.rent, *selected.buy]
        return clean_names(provider.provider_name for provider in providers)

    async def get_genres(self) -> list[str]:
        self._api.ensure_configured()
        metrics.catalog_calls_total.inc(operation="genres")
        lookup = await self._genre_cache.get(strict=True)
        return sorted(clean_names(lookup.values()), key=str.casefold)

    async def get_similar(self, movie_id: int) -> list[MovieCard]:
        if movie_id <= 0:
            return []

        self._api.ensure_configured()
        metrics.catalog_calls_total.inc(operation="similar")
        try:
            response = await self._api.get_similar(movie_id)
            return await self._map_movie_list(response)
        except Exception as e:
            logger.warning(f"TMDB similar titles failed for {movie_id}: {e}")
            raise

    async def _map_movie_list(self, response: TmdbMovieListResponse) -> list[MovieCard]:
        lookup: Mapping[int, str] = {}
        if any(result.genre_ids for result in response.results):
            lookup = await self._genre_cache.get()

        cards = []
        for result in response.results:
            if result.id <= 0 or _blank(result.title):
                continue
            genre_names = (lookup.get(genre_id) for genre_id in result.genre_ids)
            cards.append(
                MovieCard(
                    movie_id=result.id,
                    title=result.title.strip(),
                    runtime_minutes=normalize_runtime(result.runtime),
                    genres=tuple(clean_names(genre_names)),
                    poster_url=image_url(result.poster_path, TMDB_POSTER_SIZE),
                    backdrop_url=image_url(result.backdrop_path, TMDB_BACKDROP_SIZE),
                    release_year=release_year(result.release_date),
                    overview=(result.overview or "").strip() or None,
                )
            )
        return cards

    async def _load_genre_lookup(self) -> dict[int, str]:
        response = await self._api.get_genres()
        return {
            genre.id: genre.name.strip()
            for genre in response.genres
            if genre.id > 0 and not _blank(genre.name)
        }


def create_tmdb_catalog(
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> TmdbMovieCatalog:
    """Wire the executor, API client and genre cache from settings."""
    options = settings.tmdb
    client = client or get_tmdb_client(timeout=options.request_timeout_seconds)
    executor = TmdbRequestExecutor(client, RetryConfig.from_options(options))
    api = TmdbApiClient(client, executor, options)
    return TmdbMovieCatalog(api, options)
