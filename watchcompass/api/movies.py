"""Movie search, details and similar-title endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from watchcompass.api.dependencies import get_catalog
from watchcompass.models.movie import MovieDetailsWithProviders
from watchcompass.models.schemas import MovieCardRead, MovieDetailsRead, MovieListResponse
from watchcompass.services.catalog import MovieCatalog

router = APIRouter()


def _require_positive_id(movie_id: int) -> None:
    if movie_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Movie id must be positive.",
        )


@router.get("/search", response_model=MovieListResponse)
async def search_movies(
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
    query: Annotated[str | None, Query(max_length=200)] = None,
) -> MovieListResponse:
    """Search movies by title."""
    if query is None or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query is required.",
        )

    cards = await catalog.search(query)
    return MovieListResponse(items=[MovieCardRead.from_card(card) for card in cards])


@router.get("/{movie_id}", response_model=MovieDetailsRead)
async def get_movie(
    movie_id: int,
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
    country_code: Annotated[str, Query()] = "",
) -> MovieDetailsRead:
    """Get movie details with the providers available in a country."""
    _require_positive_id(movie_id)

    details = await catalog.get_details(movie_id)
    if details is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie not found.",
        )

    providers = await catalog.get_watch_providers(movie_id, country_code)
    return MovieDetailsRead.from_details(
        MovieDetailsWithProviders(details=details, providers=tuple(providers))
    )


@router.get("/{movie_id}/similar", response_model=MovieListResponse)
async def get_similar_movies(
    movie_id: int,
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
) -> MovieListResponse:
    """Get titles similar to a movie."""
    _require_positive_id(movie_id)

    cards = await catalog.get_similar(movie_id)
    return MovieListResponse(items=[MovieCardRead.from_card(card) for card in cards])
