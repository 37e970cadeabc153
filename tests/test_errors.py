from fastapi.testclient import TestClient

from portfolio.api.v1.dependencies import get_news_service
from portfolio.main import app


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
    assert res.headers.get("x-request-id")


def test_request_id_is_echoed(client):
    res = client.get("/health", headers={"X-Request-ID": "0f6c3c1e8b9d4f1aa1f0d2e3c4b5a697"})

    assert res.headers["x-request-id"] == "0f6c3c1e8b9d4f1aa1f0d2e3c4b5a697"


def test_unknown_route_uses_error_shape(client):
    res = client.get("/api/v1/nope")

    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


def test_method_not_allowed(client):
    res = client.patch("/api/v1/projects")

    assert res.status_code == 405
    assert "error" in res.json()


def test_malformed_json_is_400(client):
    res = client.post("/api/v1/contact", content="{not json", headers={"Content-Type": "application/json"})

    assert res.status_code == 400
    assert "error" in res.json()


def test_unexpected_error_is_500_without_leak(client):
    def broken():
        raise RuntimeError("database exploded")

    app.dependency_overrides[get_news_service] = broken
    res = TestClient(app, raise_server_exceptions=False).get("/api/v1/news")

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
