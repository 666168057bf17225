import pytest

from api.dependencies.rate_limits import HEALTHCHECK_LIMIT
from api.middleware import CORRELATION_HEADER


@pytest.mark.unit
class TestSystemRoutes:
    def test_version(self, client):
        response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": "abc1234"}

    def test_health_reports_configuration(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "configured" in response.json()

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={CORRELATION_HEADER: "req-42"})

        assert response.headers[CORRELATION_HEADER] == "req-42"

    def test_correlation_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers[CORRELATION_HEADER]

    def test_rate_limit(self, client):
        allowed = int(HEALTHCHECK_LIMIT.split("/")[0])
        for _ in range(allowed):
            assert client.get("/version").status_code == 200

        response = client.get("/version")

        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded"}
