"""Integration tests for the Logging API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from logstore.api import router
from shared.errors import register_error_handlers
from shared.security import create_access_token


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


def _post(client, headers, **overrides):
    payload = {
        "level": "Error",
        "message": "Payment provider timeout",
        "service_name": "OrderService",
        "category": "Payments",
        "correlation_id": "corr-42",
        "user_id": "7d1f4e2a-0c55-4d8e-9f8a-1b2c3d4e5f60",
        "properties": {"attempt": 3},
    }
    payload.update(overrides)
    return client.post("/api/logs", json=payload, headers=headers)


class TestCreate:
    def test_created_with_envelope(self, client, auth_headers):
        response = _post(client, auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["level"] == "Error"
        assert body["data"]["properties"] == '{"attempt": 3}'

    def test_invalid_level_is_bad_request(self, client, auth_headers):
        assert _post(client, auth_headers, level="Shouting").status_code == 400

    def test_zulu_timestamp_then_list(self, client, auth_headers):
        assert _post(client, auth_headers).status_code == 201
        assert _post(client, auth_headers, timestamp="2026-10-19T10:00:00Z").status_code == 201

        response = client.get("/api/logs", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["total_count"] == 2

    def test_requires_token(self, client):
        assert client.post("/api/logs", json={}).status_code == 401


class TestRead:
    @pytest.fixture(autouse=True)
    def seeded(self, client, auth_headers):
        _post(client, auth_headers)
        _post(client, auth_headers, service_name="ProductService", category="Stock", correlation_id="corr-7", user_id=None)

    def test_list(self, client, auth_headers):
        body = client.get("/api/logs", headers=auth_headers).json()
        assert body["success"] is True
        assert body["data"]["total_count"] == 2

    def test_search(self, client, auth_headers):
        body = client.get("/api/logs/search", params={"serviceName": "product"}, headers=auth_headers).json()
        assert [e["category"] for e in body["data"]["items"]] == ["Stock"]

    def test_by_service(self, client, auth_headers):
        body = client.get("/api/logs/service/OrderService", headers=auth_headers).json()
        assert body["data"]["total_count"] == 1

    def test_by_correlation(self, client, auth_headers):
        body = client.get("/api/logs/correlation/corr-7", headers=auth_headers).json()
        assert body["data"]["items"][0]["service_name"] == "ProductService"

    def test_by_user(self, client, auth_headers):
        body = client.get("/api/logs/user/7d1f4e2a-0c55-4d8e-9f8a-1b2c3d4e5f60", headers=auth_headers).json()
        assert body["data"]["total_count"] == 1


class TestPurge:
    def test_admin_can_purge(self, client, auth_headers):
        _post(client, auth_headers)
        response = client.delete("/api/logs/purge", params={"days": 30}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["purged"] == 0

    def test_customer_cannot_purge(self, client):
        token = create_access_token(
            user_id="7d1f4e2a-0c55-4d8e-9f8a-1b2c3d4e5f60", email="ana@example.com", roles=["customer"]
        ).token
        response = client.delete("/api/logs/purge", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403
        assert response.json() == {"error": "Insufficient permissions"}


def test_health(client):
    assert client.get("/api/logs/health").json()["service"] == "LoggingService"
