"""Movie catalog module.

Provides the catalog contract and its implementations:

- ``TmdbMovieCatalog``: TMDB v3 adapter with retrying requests and a shared
  genre lookup
- ``CachedMovieCatalog``: caching decorator over any catalog
- ``NoOpMovieCatalog``: empty catalog

Usage:
    from watchcompass.services.catalog import CachedMovieCatalog, create_tmdb_catalog

    catalog = CachedMovieCatalog(
        create_tmdb_catalog(settings),
        MemoryCacheStore(),
        settings.catalog_cache,
    )
    cards = await catalog.search("matrix")
"""

from watchcompass.services.catalog.base import MovieCatalog, NoOpMovieCatalog
from watchcompass.services.catalog.cached import CachedMovieCatalog
from watchcompass.services.catalog.errors import (
    CatalogConfigurationError,
    CatalogError,
    UpstreamError,
    UpstreamParseError,
    UpstreamStatusError,
    UpstreamTransientError,
)
from watchcompass.services.catalog.executor import TmdbRequestExecutor
from watchcompass.services.catalog.genre_cache import GenreLookupCache
from watchcompass.services.catalog.tmdb_api import TmdbApiClient, normalize_country
from watchcompass.services.catalog.tmdb_catalog import TmdbMovieCatalog, create_tmdb_catalog

__all__ = [
    # Contract
    "MovieCatalog",
    "NoOpMovieCatalog",
    # Implementations
    "CachedMovieCatalog",
    "TmdbMovieCatalog",
    "create_tmdb_catalog",
    # TMDB plumbing
    "GenreLookupCache",
    "TmdbApiClient",
    "TmdbRequestExecutor",
    "normalize_country",
    # Errors
    "CatalogConfigurationError",
    "CatalogError",
    "UpstreamError",
    "UpstreamParseError",
    "UpstreamStatusError",
    "UpstreamTransientError",
]
