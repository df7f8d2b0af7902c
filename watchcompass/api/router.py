"""Main API router."""

from fastapi import APIRouter

from watchcompass.api.genres import router as genres_router
from watchcompass.api.movies import router as movies_router
from watchcompass.api.recommendations import router as recommendations_router

api_router = APIRouter(prefix="/api")

api_router.include_router(genres_router, prefix="/genres", tags=["genres"])
api_router.include_router(movies_router, prefix="/movies", tags=["movies"])
api_router.include_router(recommendations_router, prefix="/recommendations", tags=["recommendations"])
