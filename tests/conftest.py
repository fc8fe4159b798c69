"""
Pytest configuration and shared fixtures for the PetroData Nexus API tests.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Settings are cached on first use, so the test environment is fixed before the app import
os.environ.setdefault("PETRODATA_STORAGE_BACKEND", "memory")
os.environ.setdefault("PETRODATA_SEED_ON_STARTUP", "false")
os.environ.setdefault("PETRODATA_USE_MOCK_AI", "true")

from petrodata.main import app
from petrodata.shared.dependencies import get_container
from petrodata.infrastructure.repositories.in_memory_record_store import InMemoryRecordStore
from petrodata.infrastructure.adapters.mock_text_generation_adapter import MockTextGenerationAdapter


@pytest.fixture(scope="session")
def test_client():
    """
    Create a test client for the FastAPI application.
    Session-scoped to avoid recreating for each test.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def record_store():
    """Fresh in-memory store wired into the application container."""
    store = InMemoryRecordStore()
    get_container().override_record_store(store)
    return store


@pytest.fixture
def text_generator():
    """Mock text generator wired into the application container."""
    generator = MockTextGenerationAdapter()
    get_container().override_text_generator(generator)
    return generator


@pytest.fixture
def client(test_client, record_store, text_generator):
    """Test client backed by an empty store for each test."""
    return test_client


@pytest.fixture(scope="session")
def api_endpoints():
    """Common API endpoints used in tests."""
    return {
        "health": "/health",
        "root": "/",
        "reports": "/api/v1/reports/",
        "overview": "/api/v1/reports/overview",
        "period": "/api/v1/reports/period",
        "export": "/api/v1/reports/export",
        "audit": "/api/v1/reports/audit",
        "seed": "/api/v1/reports/seed"
    }


@pytest.fixture
def sample_submission():
    """Camel-cased form payload as sent by the dashboard."""
    return {
        "date": "2024-03-01",
        "fieldName": "East Mesa",
        "wellId": "W-1001",
        "oilProducedBbl": 1250,
        "gasProducedMcf": 1310,
        "waterProducedBbl": 720,
        "employeesAffected": 0,
        "weatherCondition": "Sunny",
        "notes": "Routine operations."
    }


class TestAssertions:
    """Helper class for common test assertions."""

    @staticmethod
    def assert_successful_response(response, expected_status=200):
        """Assert that a response is successful."""
        assert response.status_code == expected_status, f"Expected {expected_status}, got {response.status_code}: {response.text}"
        return response.json()

    @staticmethod
    def assert_error_response(response, expected_status, expected_code=None):
        """Assert that a response contains an expected error envelope."""
        assert response.status_code == expected_status, f"Expected {expected_status}, got {response.status_code}: {response.text}"
        body = response.json()
        assert body["success"] is False
        if expected_code is not None:
            assert body["error"]["error_code"] == expected_code
        return body

    @staticmethod
    def assert_json_structure(data, required_keys):
        """Assert that JSON data contains required keys."""
        for key in required_keys:
            assert key in data, f"Missing required key: {key}"


@pytest.fixture
def test_assertions():
    """Provide test assertion helpers."""
    return TestAssertions
