"""Pydantic schemas for API validation and serialization."""

from pydantic import BaseModel, ConfigDict, Field

from watchcompass.models.movie import (
    MovieCard,
    MovieDetailsWithProviders,
    Recommendation,
)


# Movie schemas
class MovieCardRead(BaseModel):
    """Movie summary used for search and similar-title results."""

    model_config = ConfigDict(from_attributes=True)

    movie_id: int
    title: str
    runtime_minutes: int | None = None
    genres: list[str] = []
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None

    @classmethod
    def from_card(cls, card: MovieCard) -> "MovieCardRead":
        return cls.model_validate(card)


class MovieListResponse(BaseModel):
    """List of movie summaries (search results, similar titles)."""

    items: list[MovieCardRead]


class MovieDetailsRead(BaseModel):
    """Detailed movie information enriched with availability."""

    movie_id: int
    title: str
    runtime_minutes: int | None = None
    genres: list[str] = []
    providers: list[str] = []
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None

    @classmethod
    def from_details(cls, item: MovieDetailsWithProviders) -> "MovieDetailsRead":
        details = item.details
        return cls(
            movie_id=details.movie_id,
            title=details.title,
            runtime_minutes=details.runtime_minutes if details.has_runtime else None,
            genres=list(details.genres),
            providers=list(item.providers),
            poster_url=details.poster_url,
            backdrop_url=details.backdrop_url,
            release_year=details.release_year,
            overview=details.overview,
        )


# Genre schemas
class GenreListResponse(BaseModel):
    """Available genre names sorted alphabetically."""

    items: list[str]


# Recommendation schemas
class RecommendationRequest(BaseModel):
    """Request payload for mood and time-budget recommendations.

    Mood and budget are validated by the endpoint so that invalid values are
    reported with a readable message instead of a schema error.
    """

    mood: str
    time_budget_minutes: int
    query: str | None = None
    avoid_genres: list[str] = Field(default_factory=list)
    country_code: str = ""


class RecommendationRead(BaseModel):
    """A recommended movie tailored to the requested mood and constraints."""

    model_config = ConfigDict(from_attributes=True)

    movie_id: int
    title: str
    runtime_minutes: int
    reasons: list[str]
    providers: list[str] = []
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_year: int | None = None
    overview: str | None = None

    @classmethod
    def from_recommendation(cls, recommendation: Recommendation) -> "RecommendationRead":
        return cls.model_validate(recommendation)


class RecommendationsResponse(BaseModel):
    """Ranked list of recommendations."""

    items: list[RecommendationRead]
