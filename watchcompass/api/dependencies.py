"""Process-wide service dependencies for the API routes."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from watchcompass.config import get_settings
from watchcompass.services.catalog import (
    CachedMovieCatalog,
    MovieCatalog,
    create_tmdb_catalog,
)
from watchcompass.services.recommendations import RecommendationEngine
from watchcompass.utils.cache import CacheStore, create_cache_store


@lru_cache
def get_cache_store() -> CacheStore:
    """Get the shared cache store (Redis when configured, memory otherwise)."""
    return create_cache_store(get_settings())


@lru_cache
def get_catalog() -> MovieCatalog:
    """Get the shared catalog: TMDB behind the caching decorator.

    One instance per process so the genre lookup and cache are shared by all
    requests.
    """
    settings = get_settings()
    return CachedMovieCatalog(
        create_tmdb_catalog(settings),
        get_cache_store(),
        settings.catalog_cache,
    )


def get_recommendation_engine(
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
) -> RecommendationEngine:
    return RecommendationEngine(catalog)


def reset_dependencies() -> None:
    """Drop the shared instances so the next request rebuilds them."""
    get_catalog.cache_clear()
    get_cache_store.cache_clear()
