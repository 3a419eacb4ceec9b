"""Tests for the root and health endpoints."""


class TestHealth:
    """Test service liveness endpoints."""

    def test_health_reports_app_name(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "app_name": "Subwatch"}

    def test_root_reports_version(self, client):
        data = client.get("/").json()
        assert data == {"name": "Subwatch", "version": "0.1.0", "status": "running"}
