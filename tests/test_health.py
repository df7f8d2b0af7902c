"""Tests for health check and metrics endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_endpoint_exists(self, client: AsyncClient):
        """Test that health endpoint returns a response."""
        response = await client.get("/health")

        # Should return 200 or 503 depending on service status
        assert response.status_code in [200, 503]

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "checks" in data

    @pytest.mark.asyncio
    async def test_health_status_values(self, client: AsyncClient):
        """Test health status is a valid value."""
        response = await client.get("/health")
        data = response.json()

        assert data["status"] in ["healthy", "degraded"]

    @pytest.mark.asyncio
    async def test_health_checks_structure(self, client: AsyncClient):
        """Test that checks contain the catalog and the cache store."""
        response = await client.get("/health")
        checks = response.json()["checks"]

        assert "catalog" in checks
        assert "cache" in checks


class TestMetrics:
    """Tests for /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_exposes_catalog_counters(self, client: AsyncClient):
        """Test the Prometheus output includes request and catalog metrics."""
        await client.get("/api/genres")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text
        assert "# TYPE catalog_calls_total counter" in response.text
