"""Recommendations API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from watchcompass.api.dependencies import get_catalog, get_recommendation_engine
from watchcompass.constants import MAX_AVOID_GENRES
from watchcompass.models.movie import InvalidTimeBudgetError, Mood, TimeBudget
from watchcompass.models.schemas import (
    RecommendationRead,
    RecommendationRequest,
    RecommendationsResponse,
)
from watchcompass.services.catalog import MovieCatalog
from watchcompass.services.recommendations import RecommendationEngine, attach_providers

router = APIRouter()


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("", response_model=RecommendationsResponse)
async def create_recommendations(
    request: RecommendationRequest,
    engine: Annotated[RecommendationEngine, Depends(get_recommendation_engine)],
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
) -> RecommendationsResponse:
    """Recommend up to three movies for a mood and time budget, with providers."""
    try:
        mood = Mood.parse(request.mood)
    except ValueError:
        raise _bad_request("Invalid mood provided.") from None

    if len(request.avoid_genres) > MAX_AVOID_GENRES:
        raise _bad_request(f"Avoid genres cannot contain more than {MAX_AVOID_GENRES} entries.")

    try:
        budget = TimeBudget(request.time_budget_minutes)
    except InvalidTimeBudgetError:
        raise _bad_request("Time budget must be between 1 and 600 minutes.") from None

    recommendations = await engine.recommend(
        mood,
        budget,
        query=request.query,
        avoid_genres=request.avoid_genres,
    )
    recommendations = await attach_providers(catalog, recommendations, request.country_code)

    return RecommendationsResponse(
        items=[RecommendationRead.from_recommendation(rec) for rec in recommendations]
    )
