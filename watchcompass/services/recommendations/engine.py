"""Mood and time-budget recommendation engine.

Strategy:
1. Search the catalog with the caller's query, or the mood's default token
2. Walk the first few results in search order
3. Fill in unknown runtimes from the details endpoint
4. Drop titles with an avoided genre or a runtime over the budget
5. Explain each pick with budget, mood and (when genres are unknown) query reasons

Candidates are processed one at a time. The engine never fetches providers.
"""

from collections.abc import Iterable
from dataclasses import replace

from watchcompass.constants import (
    MAX_REASON_GENRES,
    MAX_RECOMMENDATIONS,
    RECOMMENDATION_CANDIDATE_WINDOW,
)
from watchcompass.models.movie import Mood, MovieCard, Recommendation, TimeBudget
from watchcompass.services.catalog.base import MovieCatalog
from watchcompass.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


def effective_query(mood: Mood, query: str | None) -> str:
    """Trimmed query, or the mood's default search token when blank."""
    if query is None or not query.strip():
        return mood.default_query
    return query.strip()


def normalize_avoided(avoid_genres: Iterable[str] | None) -> set[str]:
    return {genre.strip().casefold() for genre in avoid_genres or () if genre and genre.strip()}


def budget_reason(budget: TimeBudget, runtime_minutes: int | None) -> str:
    if runtime_minutes is None:
        return f"Runtime unknown, so we assumed it fits your {budget.minutes}-minute budget."
    return f"Fits your {budget.minutes}-minute budget at {runtime_minutes} minutes."


def mood_reason(mood: Mood, genres: tuple[str, ...], query: str) -> str:
    shown = genres[:MAX_REASON_GENRES]
    subject = " and ".join(shown) if shown else f'"{query}"'
    article = "an" if mood.value[0] in "AEIOU" else "a"
    return f"Picked for {article} {mood.value} mood: {subject}."


def query_reason(query: str) -> str:
    return f'Matched your search for "{query}".'


class RecommendationEngine:
    """Pick up to three titles that fit a mood and a time budget."""

    def __init__(self, catalog: MovieCatalog) -> None:
        self._catalog = catalog

    async def recommend(
        self,
        mood: Mood,
        budget: TimeBudget,
        query: str | None = None,
        avoid_genres: Iterable[str] | None = None,
    ) -> list[Recommendation]:
        """Recommend titles in search order.

        Args:
            mood: Mood driving the default query and the mood reason
            budget: Maximum runtime; titles of exactly this length are accepted
            query: Optional free-text search, overriding the mood's default token
            avoid_genres: Genre names to exclude, compared case-insensitively

        Returns:
            Zero to three recommendations
        """
        search_query = effective_query(mood, query)
        log = LogContext(logger, mood=mood.value, budget=budget.minutes, query=search_query)

        candidates = await self._catalog.search(search_query)
        if not candidates:
            log.info("Search returned no candidates")
            return []

        avoided = normalize_avoided(avoid_genres)
        recommendations: list[Recommendation] = []

        for candidate in candidates[:RECOMMENDATION_CANDIDATE_WINDOW]:
            candidate = await self._resolve_runtime(candidate)
            candidate_log = log.bind(movie_id=candidate.movie_id)
            genres = tuple(genre.strip() for genre in candidate.genres if genre and genre.strip())

            if any(genre.casefold() in avoided for genre in genres):
                candidate_log.debug("Skipping: avoided genre")
                continue

            runtime = candidate.runtime_minutes
            if runtime is not None and runtime > budget.minutes:
                candidate_log.debug(f"Skipping: {runtime} minutes over budget")
                continue

            reasons = [budget_reason(budget, runtime), mood_reason(mood, genres, search_query)]
            if not genres:
                reasons.append(query_reason(search_query))

            recommendations.append(
                Recommendation(
                    movie_id=candidate.movie_id,
                    title=candidate.title,
                    runtime_minutes=runtime if runtime is not None else budget.minutes,
                    reasons=tuple(reasons),
                    poster_url=candidate.poster_url,
                    backdrop_url=candidate.backdrop_url,
                    release_year=candidate.release_year,
                    overview=candidate.overview,
                )
            )
            if len(recommendations) >= MAX_RECOMMENDATIONS:
                break

        log.info(f"Recommended {len(recommendations)} of {len(candidates)} candidates")
        return recommendations

    async def _resolve_runtime(self, candidate: MovieCard) -> MovieCard:
        """Replace an unknown runtime (and genres, title) from the details endpoint."""
        if candidate.runtime_minutes is not None and candidate.runtime_minutes > 0:
            return candidate

        details = await self._catalog.get_details(candidate.movie_id)
        if details is None:
            return replace(candidate, runtime_minutes=None)

        return replace(
            candidate,
            title=details.title,
            runtime_minutes=details.runtime_minutes if details.has_runtime else None,
            genres=details.genres,
            poster_url=candidate.poster_url or details.poster_url,
            backdrop_url=candidate.backdrop_url or details.backdrop_url,
            release_year=candidate.release_year or details.release_year,
            overview=candidate.overview or details.overview,
        )
