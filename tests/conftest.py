"""Pytest configuration and fixtures."""

import random
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from watchcompass.api.dependencies import get_catalog
from watchcompass.config import TmdbOptions
from watchcompass.main import app
from watchcompass.models.movie import MovieCard, MovieDetails
from watchcompass.services.catalog import TmdbApiClient, TmdbMovieCatalog, TmdbRequestExecutor
from watchcompass.utils.retry import RetryConfig

TMDB_TEST_BASE_URL = "https://tmdb.test/3"


class FakeCatalog:
    """In-memory movie catalog that records every call."""

    def __init__(self) -> None:
        self.search_results: dict[str, list[MovieCard]] = {}
        self.details: dict[int, MovieDetails] = {}
        self.providers: dict[int, list[str]] = {}
        self.similar: dict[int, list[MovieCard]] = {}
        self.genres: list[str] = []
        self.errors: dict[str, Exception] = {}
        self.failing_providers: set[int] = set()
        self.calls: list[tuple] = []

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def _raise_if_configured(self, operation: str) -> None:
        if operation in self.errors:
            raise self.errors[operation]

    async def search(self, query: str) -> list[MovieCard]:
        self.calls.append(("search", query))
        self._raise_if_configured("search")
        return list(self.search_results.get(query, []))

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        self.calls.append(("details", movie_id))
        self._raise_if_configured("details")
        return self.details.get(movie_id)

    async def get_watch_providers(self, movie_id: int, country_code: str) -> list[str]:
        self.calls.append(("providers", movie_id, country_code))
        self._raise_if_configured("providers")
        if movie_id in self.failing_providers:
            raise RuntimeError(f"providers unavailable for {movie_id}")
        return list(self.providers.get(movie_id, []))

    async def get_genres(self) -> list[str]:
        self.calls.append(("genres",))
        self._raise_if_configured("genres")
        return list(self.genres)

    async def get_similar(self, movie_id: int) -> list[MovieCard]:
        self.calls.append(("similar", movie_id))
        self._raise_if_configured("similar")
        return list(self.similar.get(movie_id, []))


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    """Create an empty fake catalog."""
    return FakeCatalog()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def tmdb_options() -> TmdbOptions:
    """TMDB options pointing at a fake host, with instant backoff."""
    return TmdbOptions(
        base_url=TMDB_TEST_BASE_URL,
        api_key="test-key",
        auth_mode="bearer",
        default_country_code="US",
        language="en-US",
        request_timeout_seconds=5.0,
        max_retries=2,
        backoff_base_ms=200,
        backoff_jitter_ms=0,
    )


@pytest_asyncio.fixture
async def build_tmdb_catalog(
    tmdb_options: TmdbOptions,
    sleep_recorder: SleepRecorder,
) -> AsyncGenerator[Callable[..., TmdbMovieCatalog], None]:
    """Build a TMDB catalog whose HTTP traffic is served by a handler function."""
    clients: list[httpx.AsyncClient] = []

    def _build(
        handler: Callable[[httpx.Request], httpx.Response],
        options: TmdbOptions | None = None,
    ) -> TmdbMovieCatalog:
        options = options or tmdb_options
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        executor = TmdbRequestExecutor(
            client,
            RetryConfig.from_options(options),
            rng=random.Random(0),
            sleep=sleep_recorder,
        )
        return TmdbMovieCatalog(TmdbApiClient(client, executor, options), options)

    yield _build

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def client(fake_catalog: FakeCatalog) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client backed by the fake catalog."""
    app.dependency_overrides[get_catalog] = lambda: fake_catalog

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
