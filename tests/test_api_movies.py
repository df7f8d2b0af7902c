"""Tests for movie and genre API endpoints."""

import pytest
from httpx import AsyncClient

from watchcompass.models.movie import MovieCard, MovieDetails
from watchcompass.services.catalog import CatalogConfigurationError, UpstreamStatusError


class TestSearchEndpoint:
    """Tests for /api/movies/search."""

    @pytest.mark.asyncio
    async def test_search_returns_items(self, client: AsyncClient, fake_catalog):
        """Test search results are returned as movie cards."""
        fake_catalog.search_results["matrix"] = [
            MovieCard(603, "The Matrix", 136, ("Action",), release_year=1999)
        ]

        response = await client.get("/api/movies/search", params={"query": "matrix"})

        assert response.status_code == 200
        items = response.json()["items"]
        assert items[0]["movie_id"] == 603
        assert items[0]["genres"] == ["Action"]
        assert items[0]["release_year"] == 1999

    @pytest.mark.asyncio
    async def test_blank_query_rejected(self, client: AsyncClient, fake_catalog):
        """Test a blank query returns 400 without calling the catalog."""
        response = await client.get("/api/movies/search", params={"query": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Query is required."
        assert fake_catalog.calls == []

    @pytest.mark.asyncio
    async def test_missing_query_rejected(self, client: AsyncClient):
        response = await client.get("/api/movies/search")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_upstream_failure_maps_to_502(self, client: AsyncClient, fake_catalog):
        """Test upstream errors surface as a bad gateway."""
        fake_catalog.errors["search"] = UpstreamStatusError("boom", 401)

        response = await client.get("/api/movies/search", params={"query": "matrix"})

        assert response.status_code == 502
        assert "detail" in response.json()

    @pytest.mark.asyncio
    async def test_missing_configuration_maps_to_503(self, client: AsyncClient, fake_catalog):
        """Test a missing API key surfaces as service unavailable."""
        fake_catalog.errors["search"] = CatalogConfigurationError("no key")

        response = await client.get("/api/movies/search", params={"query": "matrix"})

        assert response.status_code == 503


class TestMovieDetailsEndpoint:
    """Tests for /api/movies/{movie_id}."""

    @pytest.mark.asyncio
    async def test_details_with_providers(self, client: AsyncClient, fake_catalog):
        """Test details are returned with providers for the requested country."""
        fake_catalog.details[603] = MovieDetails(603, "The Matrix", 136, ("Action",))
        fake_catalog.providers[603] = ["Netflix"]

        response = await client.get("/api/movies/603", params={"country_code": "ca"})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "The Matrix"
        assert data["runtime_minutes"] == 136
        assert data["providers"] == ["Netflix"]
        assert ("providers", 603, "ca") in fake_catalog.calls

    @pytest.mark.asyncio
    async def test_unknown_runtime_is_null(self, client: AsyncClient, fake_catalog):
        fake_catalog.details[5] = MovieDetails(5, "Mystery")

        response = await client.get("/api/movies/5")

        assert response.json()["runtime_minutes"] is None

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient):
        response = await client.get("/api/movies/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found."

    @pytest.mark.asyncio
    async def test_non_positive_id_rejected(self, client: AsyncClient, fake_catalog):
        """Test ids <= 0 return 400 without calling the catalog."""
        response = await client.get("/api/movies/0")

        assert response.status_code == 400
        assert fake_catalog.calls == []


class TestSimilarEndpoint:
    """Tests for /api/movies/{movie_id}/similar."""

    @pytest.mark.asyncio
    async def test_similar_titles(self, client: AsyncClient, fake_catalog):
        fake_catalog.similar[603] = [MovieCard(604, "The Matrix Reloaded", 138)]

        response = await client.get("/api/movies/603/similar")

        assert response.status_code == 200
        assert [item["movie_id"] for item in response.json()["items"]] == [604]

    @pytest.mark.asyncio
    async def test_negative_id_rejected(self, client: AsyncClient):
        response = await client.get("/api/movies/-3/similar")

        assert response.status_code == 400


class TestGenresEndpoint:
    """Tests for /api/genres."""

    @pytest.mark.asyncio
    async def test_lists_genres(self, client: AsyncClient, fake_catalog):
        fake_catalog.genres = ["Comedy", "Drama"]

        response = await client.get("/api/genres")

        assert response.status_code == 200
        assert response.json() == {"items": ["Comedy", "Drama"]}
