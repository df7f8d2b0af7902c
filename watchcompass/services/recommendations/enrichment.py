"""Attach streaming providers to ranked recommendations."""

from dataclasses import replace

from watchcompass.models.movie import Recommendation
from watchcompass.services.catalog.base import MovieCatalog
from watchcompass.utils.logging import get_logger

logger = get_logger(__name__)


async def attach_providers(
    catalog: MovieCatalog,
    recommendations: list[Recommendation],
    country_code: str,
) -> list[Recommendation]:
    """Fetch providers for each recommendation, one movie at a time.

    A failure for one movie is logged and leaves its providers empty; the
    others are still enriched. Cancellation propagates.
    """
    enriched = []
    for recommendation in recommendations:
        try:
            providers = await catalog.get_watch_providers(recommendation.movie_id, country_code)
        except Exception as e:
            logger.warning(f"Could not load providers for {recommendation.movie_id}: {e}")
            providers = []
        enriched.append(replace(recommendation, providers=tuple(providers)))
    return enriched
