"""Catalog domain values: movies, recommendations, moods and time budgets.

All values are immutable. "Not found" is represented by ``None`` at the call
site (``MovieDetails | None``), never by an exception.
"""

import enum
from dataclasses import dataclass

from watchcompass.constants import (
    FALLBACK_QUERY,
    TIME_BUDGET_MAX_MINUTES,
    TIME_BUDGET_MIN_MINUTES,
)


@dataclass(frozen=True)
class MovieCard:
    """Lightweight movie summary returned by search and similar-title lookups."""

    movie_id: int
    title: str
    runtime_minutes: int | None = None
    genres: tuple[str, ...] = ()
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None


@dataclass(frozen=True)
class MovieDetails:
    """Full movie record.

    ``runtime_minutes`` is 0 when the catalog does not know the runtime.
    """

    movie_id: int
    title: str
    runtime_minutes: int = 0
    genres: tuple[str, ...] = ()
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None

    @property
    def has_runtime(self) -> bool:
        return self.runtime_minutes > 0


@dataclass(frozen=True)
class MovieDetailsWithProviders:
    """Movie details enriched with where the title can be watched."""

    details: MovieDetails
    providers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    """A recommended title with the reasons it was picked."""

    movie_id: int
    title: str
    runtime_minutes: int
    reasons: tuple[str, ...]
    providers: tuple[str, ...] = ()
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None


class InvalidTimeBudgetError(ValueError):
    """Raised when a time budget falls outside the allowed range."""

    pass


@dataclass(frozen=True)
class TimeBudget:
    """Viewing time available, in minutes (1 to 600 inclusive)."""

    minutes: int

    def __post_init__(self) -> None:
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise InvalidTimeBudgetError("Time budget must be a whole number of minutes.")
        if not TIME_BUDGET_MIN_MINUTES <= self.minutes <= TIME_BUDGET_MAX_MINUTES:
            raise InvalidTimeBudgetError(
                f"Time budget must be between {TIME_BUDGET_MIN_MINUTES} "
                f"and {TIME_BUDGET_MAX_MINUTES} minutes."
            )


class Mood(str, enum.Enum):
    """Mood driving the tone of recommendations."""

    CHILL = "Chill"
    FEEL_GOOD = "FeelGood"
    INTENSE = "Intense"
    SCARY = "Scary"

    @property
    def default_query(self) -> str:
        """Search token used when the caller gives no free-text query."""
        return MOOD_QUERIES.get(self, FALLBACK_QUERY)

    @classmethod
    def parse(cls, value: str) -> "Mood":
        """Parse a mood name case-insensitively.

        Raises:
            ValueError: If the value is not a known mood
        """
        normalized = value.strip().casefold()
        for mood in cls:
            if mood.value.casefold() == normalized or mood.name.casefold() == normalized:
                return mood
        raise ValueError(f"Unknown mood: {value!r}")


MOOD_QUERIES: dict[Mood, str] = {
    Mood.CHILL: "drama",
    Mood.FEEL_GOOD: "comedy",
    Mood.INTENSE: "thriller",
    Mood.SCARY: "horror",
}
