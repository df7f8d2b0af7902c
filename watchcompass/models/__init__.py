"""Domain values and API schemas."""

from watchcompass.models.movie import (
    InvalidTimeBudgetError,
    Mood,
    MovieCard,
    MovieDetails,
    MovieDetailsWithProviders,
    Recommendation,
    TimeBudget,
)

__all__ = [
    "InvalidTimeBudgetError",
    "Mood",
    "MovieCard",
    "MovieDetails",
    "MovieDetailsWithProviders",
    "Recommendation",
    "TimeBudget",
]
