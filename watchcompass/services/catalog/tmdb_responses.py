"""TMDB response payloads.

Only the fields the catalog maps are declared; everything else is ignored.
TMDB sends ``null`` for many optional fields, so strings default to None and
are normalized by the adapter.
"""

from pydantic import BaseModel, Field


class TmdbMovieResult(BaseModel):
    """Movie entry in search and similar-title results."""

    id: int = 0
    title: str | None = None
    genre_ids: list[int] = Field(default_factory=list)
    runtime: int | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    overview: str | None = None


class TmdbMovieListResponse(BaseModel):
    """Paged movie list (``/search/movie`` and ``/movie/{id}/similar``)."""

    results: list[TmdbMovieResult] = Field(default_factory=list)


class TmdbGenre(BaseModel):
    id: int = 0
    name: str | None = None


class TmdbGenreListResponse(BaseModel):
    genres: list[TmdbGenre] = Field(default_factory=list)


class TmdbMovieDetailsResponse(BaseModel):
    """``/movie/{id}`` payload."""

    id: int = 0
    title: str | None = None
    runtime: int | None = None
    genres: list[TmdbGenre] = Field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    overview: str | None = None


class TmdbProvider(BaseModel):
    provider_name: str | None = None


class TmdbProviderCountry(BaseModel):
    flatrate: list[TmdbProvider] = Field(default_factory=list)
    rent: list[TmdbProvider] = Field(default_factory=list)
    buy: list[TmdbProvider] = Field(default_factory=list)


class TmdbWatchProvidersResponse(BaseModel):
    """``/movie/{id}/watch/providers`` payload keyed by ISO 3166-1 country code."""

    results: dict[str, TmdbProviderCountry] = Field(default_factory=dict)
