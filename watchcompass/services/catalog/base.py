"""Movie catalog contract.

Every component that needs movie data programs against ``MovieCatalog``. The
TMDB adapter implements it, the caching catalog wraps any implementation by
delegation, and ``NoOpMovieCatalog`` answers with empty results.
"""

from typing import Protocol, runtime_checkable

from watchcompass.models.movie import MovieCard, MovieDetails


@runtime_checkable
class MovieCatalog(Protocol):
    """Operations offered by a movie catalog."""

    async def search(self, query: str) -> list[MovieCard]:
        """Search movies by free text. Blank queries return no results."""
        ...

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        """Get full details, or None when the movie does not exist."""
        ...

    async def get_watch_providers(self, movie_id: int, country_code: str) -> list[str]:
        """Get provider names (subscription, rent, buy) for a country."""
        ...

    async def get_genres(self) -> list[str]:
        """Get all genre names, deduplicated and sorted."""
        ...

    async def get_similar(self, movie_id: int) -> list[MovieCard]:
        """Get titles similar to a movie."""
        ...


class NoOpMovieCatalog:
    """Catalog that knows no movies."""

    async def search(self, query: str) -> list[MovieCard]:
        return []

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        return None

    async def get_watch_providers(self, movie_id: int, country_code: str) -> list[str]:
        return []

    async def get_genres(self) -> list[str]:
        return []

    async def get_similar(self, movie_id: int) -> list[MovieCard]:
        return []
