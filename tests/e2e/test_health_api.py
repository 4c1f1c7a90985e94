"""End-to-end tests for the health endpoint."""


class TestHealth:
    """End-to-end tests for GET /health."""

    def test_reports_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "0.1.0"
        assert "git_sha" in body
