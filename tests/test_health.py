from fastapi.testclient import TestClient


class TestHealthEndpoint:
    def test_health(self, app_client: TestClient):
        response = app_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_needs_no_auth(self, app_client: TestClient):
        assert app_client.get("/health", headers={"Authorization": "junk"}).status_code == 200
