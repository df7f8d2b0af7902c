"""Genre listing endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from watchcompass.api.dependencies import get_catalog
from watchcompass.models.schemas import GenreListResponse
from watchcompass.services.catalog import MovieCatalog

router = APIRouter()


@router.get("", response_model=GenreListResponse)
async def list_genres(
    catalog: Annotated[MovieCatalog, Depends(get_catalog)],
) -> GenreListResponse:
    """List all movie genres, sorted alphabetically."""
    return GenreListResponse(items=await catalog.get_genres())
