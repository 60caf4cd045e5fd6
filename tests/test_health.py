"""
Tests for the root and health endpoints.
"""


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "JobHunt API running"}


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert data["service"] == "JobHunt API"
    assert data["timestamp"]
