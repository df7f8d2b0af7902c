"""Low-level TMDB API client.

Builds one request per endpoint (authentication, language and region
parameters) and hands it to the executor. Returns raw TMDB payload models;
mapping to catalog values happens in ``TmdbMovieCatalog``.
"""

import httpx

from watchcompass.config import TmdbOptions
from watchcompass.constants import DEFAULT_COUNTRY_FALLBACK
from watchcompass.services.catalog.errors import CatalogConfigurationError
from watchcompass.services.catalog.executor import TmdbRequestExecutor
from watchcompass.services.catalog.tmdb_responses import (
    TmdbGenreListResponse,
    TmdbMovieDetailsResponse,
    TmdbMovieListResponse,
    TmdbWatchProvidersResponse,
)


def normalize_country(country_code: str | None, default: str = DEFAULT_COUNTRY_FALLBACK) -> str:
    """Uppercase a country code, using ``default`` (then US) when blank."""
    code = (country_code or "").strip() or (default or "").strip()
    if not code:
        return DEFAULT_COUNTRY_FALLBACK
    return code.upper()


class TmdbApiClient:
    """Typed access to the TMDB endpoints used by the catalog."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        executor: TmdbRequestExecutor,
        options: TmdbOptions,
    ) -> None:
        self._client = client
        self._executor = executor
        self._options = options

    def ensure_configured(self) -> None:
        """Fail fast, before any network call, when the API key is missing."""
        if not self._options.has_api_key:
            raise CatalogConfigurationError("TMDB_API_KEY is required to call TMDB.")

    def _build_request(self, relative_path: str, params: dict[str, str | None]) -> httpx.Request:
        self.ensure_configured()

        query = {
            key: value.strip()
            for key, value in params.items()
            if value is not None and value.strip()
        }
        headers = {"Accept": "application/json"}
        api_key = self._options.api_key.strip()
        if self._options.auth_mode == "api_key_query":
            query["api_key"] = api_key
        else:
            headers["Authorization"] = f"Bearer {api_key}"

        return self._client.build_request(
            "GET",
            f"{self._options.base_url.rstrip('/')}/{relative_path}",
            params=query,
            headers=headers,
        )

    async def search_movies(self, query: str) -> TmdbMovieListResponse:
        return await self._executor.send(
            lambda: self._build_request(
                "search/movie",
                {
                    "query": query,
                    "language": self._options.language,
                    "include_adult": "false",
                    "region": normalize_country(self._options.default_country_code),
                },
            ),
            TmdbMovieListResponse,
            operation_name="search",
        )

    async def get_movie_details(self, movie_id: int) -> TmdbMovieDetailsResponse:
        return await self._executor.send(
            lambda: self._build_request(
                f"movie/{movie_id}",
                {"language": self._options.language},
            ),
            TmdbMovieDetailsResponse,
            operation_name="details",
        )

    async def get_watch_providers(self, movie_id: int, country_code: str) -> TmdbWatchProvidersResponse:
        return await self._executor.send(
            lambda: self._build_request(
                f"movie/{movie_id}/watch/providers",
                {
                    "watch_region": normalize_country(country_code, self._options.default_country_code),
                    "language": self._options.language,
                },
            ),
            TmdbWatchProvidersResponse,
            operation_name="providers",
        )

    async def get_genres(self) -> TmdbGenreListResponse:
        return await self._executor.send(
            lambda: self._build_request(
                "genre/movie/list",
                {"language": self._options.language},
            ),
            TmdbGenreListResponse,
            operation_name="genres",
        )

    async def get_similar(self, movie_id: int) -> TmdbMovieListResponse:
        return await self._executor.send(
            lambda: self._build_request(
                f"movie/{movie_id}/similar",
                {"language": self._options.language},
            ),
            TmdbMovieListResponse,
            operation_name="similar",
        )
