"""Process-wide genre id -> name lookup with lazy, single-flight refresh.

The table is in one of three states:

- empty: never loaded, or the last refresh failed
- fresh: loaded less than ``ttl`` ago
- expired: loaded, but older than ``ttl``

Reads check freshness without locking. A stale read takes the lock and checks
again before fetching, so concurrent readers that raced on an expired table
trigger exactly one refresh and then reuse its result.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import timedelta
from typing import Literal

from watchcompass.constants import GENRE_LOOKUP_TTL
from watchcompass.utils.logging import get_logger

logger = get_logger(__name__)

GenreLoader = Callable[[], Awaitable[dict[int, str]]]
GenreCacheState = Literal["empty", "fresh", "expired"]


class GenreLookupCache:
    """Refresh-on-read cache of the upstream genre table."""

    def __init__(
        self,
        loader: GenreLoader,
        ttl: timedelta = GENRE_LOOKUP_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl_seconds = ttl.total_seconds()
        self._clock = clock
        self._lookup: dict[int, str] = {}
        self._expires_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> GenreCacheState:
        if self._expires_at is None:
            return "empty"
        if self._clock() < self._expires_at:
            return "fresh"
        return "expired"

    def expire(self) -> None:
        """Mark the table stale without dropping it; the next read refreshes."""
        if self._expires_at is not None:
            self._expires_at = self._clock()

    async def get(self, *, strict: bool = False) -> Mapping[int, str]:
        """Return the genre table, refreshing it first when stale.

        A failed refresh empties the table. The failure is logged and an empty
        mapping is returned, unless ``strict`` is set, in which case it is
        re-raised after the table is cleared.
        """
        if self.state == "fresh":
            return self._lookup

        async with self._lock:
            # A concurrent reader may have refreshed while we waited
            if self.state == "fresh":
                return self._lookup

            try:
                lookup = await self._loader()
            except Exception as e:
                self._lookup = {}
                self._expires_at = None
                logger.warning(f"Genre lookup refresh failed, continuing without genres: {e}")
                if strict:
                    raise
                return self._lookup

            self._lookup = lookup
            self._expires_at = self._clock() + self._ttl_seconds
            logger.debug(f"Genre lookup refreshed with {len(lookup)} genres")
            return self._lookup
