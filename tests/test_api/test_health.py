"""
Tests for health and monitoring endpoints.
"""

from fastapi.testclient import TestClient


def test_health_check(test_client: TestClient):
    """Test health endpoint returns correct structure."""
    response = test_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert "service" in data
    assert "version" in data
    assert data["status"] == "healthy"
    assert data["repository"]["loaded"] is True
    assert data["repository"]["source"] == "fallback"
    assert data["repository"]["total_conditions"] > 0


def test_root_endpoint(test_client: TestClient):
    """Test root endpoint returns service info."""
    response = test_client.get("/")

    assert response.status_code == 200
    data = response.json()

    assert "service" in data
    assert "version" in data


def test_metrics_endpoint(test_client: TestClient):
    """Test Prometheus metrics are exposed without auth."""
    test_client.post("/api/v1/analysis", json={"identified_factors": ["cough"]})

    response = test_client.get("/api/v1/metrics")

    assert response.status_code == 200
    assert "symptolens_analyses_total" in response.text


def test_timing_header(test_client: TestClient):
    response = test_client.get("/api/v1/health")

    assert "X-Process-Time" in response.headers
