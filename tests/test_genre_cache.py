"""Tests for the shared genre lookup cache."""

import asyncio
from datetime import timedelta

import pytest

from watchcompass.services.catalog import GenreLookupCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta.total_seconds()


class CountingLoader:
    """Loader that yields to the event loop before answering."""

    def __init__(self, lookup: dict[int, str] | None = None) -> None:
        self.lookup = lookup if lookup is not None else {18: "Drama", 35: "Comedy"}
        self.calls = 0
        self.error: Exception | None = None

    async def __call__(self) -> dict[int, str]:
        self.calls += 1
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return dict(self.lookup)


class TestGenreLookupCache:
    """Tests for lazy refresh, expiry and failure handling."""

    @pytest.mark.asyncio
    async def test_starts_empty_and_loads_on_first_read(self):
        """Test the first read loads the table."""
        loader = CountingLoader()
        cache = GenreLookupCache(loader, clock=FakeClock())

        assert cache.state == "empty"
        lookup = await cache.get()

        assert lookup[18] == "Drama"
        assert cache.state == "fresh"
        assert loader.calls == 1

    @pytest.mark.asyncio
    async def test_fresh_table_is_reused_within_window(self):
        """Test reads inside the six-hour window do not refetch."""
        loader = CountingLoader()
        clock = FakeClock()
        cache = GenreLookupCache(loader, clock=clock)

        await cache.get()
        clock.advance(timedelta(hours=5, minutes=59))
        await cache.get()

        assert loader.calls == 1

    @pytest.mark.asyncio
    async def test_refreshes_after_six_hours(self):
        """Test a read after the window triggers one refresh."""
        loader = CountingLoader()
        clock = FakeClock()
        cache = GenreLookupCache(loader, clock=clock)

        await cache.get()
        clock.advance(timedelta(hours=6))
        assert cache.state == "expired"

        loader.lookup = {27: "Horror"}
        lookup = await cache.get()

        assert loader.calls == 2
        assert lookup == {27: "Horror"}

    @pytest.mark.asyncio
    async def test_concurrent_reads_after_expiry_refresh_once(self):
        """Test concurrent readers of an expired table share a single refresh."""
        loader = CountingLoader()
        cache = GenreLookupCache(loader, clock=FakeClock())

        await cache.get()
        cache.expire()

        results = await asyncio.gather(*(cache.get() for _ in range(10)))

        assert loader.calls == 2
        assert all(result[35] == "Comedy" for result in results)

    @pytest.mark.asyncio
    async def test_concurrent_first_reads_load_once(self):
        """Test concurrent readers of an empty table share a single load."""
        loader = CountingLoader()
        cache = GenreLookupCache(loader, clock=FakeClock())

        await asyncio.gather(*(cache.get() for _ in range(5)))

        assert loader.calls == 1

    @pytest.mark.asyncio
    async def test_failure_clears_table_and_is_swallowed(self):
        """Test a failed refresh empties the table and returns no genres."""
        loader = CountingLoader()
        cache = GenreLookupCache(loader, clock=FakeClock())
        await cache.get()
        cache.expire()

        loader.error = RuntimeError("tmdb down")
        lookup = await cache.get()

        assert lookup == {}
        assert cache.state == "empty"

    @pytest.mark.asyncio
    async def test_strict_read_reraises_failure(self):
        """Test a strict read clears the table and re-raises."""
        loader = CountingLoader()
        loader.error = RuntimeError("tmdb down")
        cache = GenreLookupCache(loader, clock=FakeClock())

        with pytest.raises(RuntimeError, match="tmdb down"):
            await cache.get(strict=True)

        assert cache.state == "empty"

    @pytest.mark.asyncio
    async def test_retries_after_failure(self):
        """Test the next read after a failure tries to load again."""
        loader = CountingLoader()
        loader.error = RuntimeError("tmdb down")
        cache = GenreLookupCache(loader, clock=FakeClock())

        await cache.get()
        loader.error = None
        lookup = await cache.get()

        assert loader.calls == 2
        assert lookup[18] == "Drama"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Test cancellation during a refresh is not swallowed."""

        async def cancelled_loader() -> dict[int, str]:
            raise asyncio.CancelledError()

        cache = GenreLookupCache(cancelled_loader, clock=FakeClock())

        with pytest.raises(asyncio.CancelledError):
            await cache.get()

    def test_expire_on_empty_table_stays_empty(self):
        """Test expiring a never-loaded table keeps it empty."""
        cache = GenreLookupCache(CountingLoader(), clock=FakeClock())
        cache.expire()

        assert cache.state == "empty"
