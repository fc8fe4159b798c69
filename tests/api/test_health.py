"""
Tests for health check endpoints.
"""

import asyncio

from tests.utils.test_helpers import make_record


class TestHealthEndpoints:
    """Test class for health-related endpoints."""

    def test_health_endpoint_success(self, client, api_endpoints, test_assertions):
        """Test that the health endpoint returns a successful response."""
        # Act
        response = client.get(api_endpoints["health"])

        # Assert
        data = test_assertions.assert_successful_response(response, 200)
        test_assertions.assert_json_structure(data, ["status", "service", "record_count", "ai"])

        assert data["status"] == "healthy"
        assert data["service"] == "petrodata-nexus-api"
        assert data["record_count"] == 0

    def test_health_reports_record_count(self, client, api_endpoints, record_store):
        """Test that the health endpoint reflects stored reports."""
        asyncio.run(record_store.upsert(make_record()))

        data = client.get(api_endpoints["health"]).json()
        assert data["record_count"] == 1

    def test_health_reports_ai_adapter(self, client, api_endpoints):
        """Test that the AI adapter status is exposed."""
        data = client.get(api_endpoints["health"]).json()
        assert data["ai"]["configured"] is True
        assert data["ai"]["adapter"] == "mock"

    def test_root_endpoint_success(self, client, api_endpoints, test_assertions):
        """Test that the root endpoint returns API information."""
        # Act
        response = client.get(api_endpoints["root"])

        # Assert
        data = test_assertions.assert_successful_response(response, 200)
        test_assertions.assert_json_structure(data, ["message", "version", "endpoints"])

        assert data["message"] == "PetroData Nexus API"
        assert data["version"] == "1.0.0"

        endpoints = data["endpoints"]
        for key in ["reports", "overview", "period", "export", "audit", "health", "docs"]:
            assert key in endpoints
