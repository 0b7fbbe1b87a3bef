"""Tests for favorites and the compare list endpoints."""

from __future__ import annotations

HEADERS = {"X-Client-Id": "browser-1"}


def test_favorites_toggle(client):
    response = client.post("/v1/me/favorites/moveman", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["data"] == {"ids": ["moveman"], "saved": True}

    body = client.get("/v1/me/favorites", headers=HEADERS).json()
    assert body["data"]["ids"] == ["moveman"]
    assert body["data"]["providers"][0]["name"] == "MoveMan"

    response = client.post("/v1/me/favorites/moveman", headers=HEADERS)
    assert response.json()["data"] == {"ids": [], "saved": False}


def test_favorites_unknown_provider(client):
    assert client.post("/v1/me/favorites/missing", headers=HEADERS).status_code == 404


def test_favorites_are_per_client(client):
    client.post("/v1/me/favorites/moveman", headers=HEADERS)
    other = client.get("/v1/me/favorites", headers={"X-Client-Id": "browser-2"}).json()
    assert other["data"]["ids"] == []


def test_client_cookie_identifies_client(client):
    client.cookies.set("appylink_client", "cookie-client")
    client.post("/v1/me/favorites/basil-fry")
    assert client.get("/v1/me/favorites").json()["data"]["ids"] == ["basil-fry"]
    assert client.get("/v1/me/favorites", headers=HEADERS).json()["data"]["ids"] == []


def test_compare_capped_at_three(client):
    for pid in ("moveman", "moneypenny", "basil-fry"):
        assert client.post(f"/v1/me/compare/{pid}", headers=HEADERS).json()["data"]["selected"]

    data = client.post("/v1/me/compare/van-hire-pro", headers=HEADERS).json()["data"]
    assert data["selected"] is False
    assert data["full"] is True
    assert data["ids"] == ["moveman", "moneypenny", "basil-fry"]

    body = client.get("/v1/me/compare", headers=HEADERS).json()
    assert [p["id"] for p in body["data"]["providers"]] == ["moveman", "moneypenny", "basil-fry"]
    assert body["data"]["limit"] == 3


def test_compare_clear(client):
    client.post("/v1/me/compare/moveman", headers=HEADERS)
    assert client.delete("/v1/me/compare", headers=HEADERS).json()["data"]["ids"] == []
    assert client.get("/v1/me/compare", headers=HEADERS).json()["data"]["ids"] == []


def test_client_state_stays_bounded_across_many_clients(monkeypatch, clock):
    from appylink_api.app import create_app
    from appylink_shared.config import settings
    from fastapi.testclient import TestClient

    monkeypatch.setattr(settings, "client_state_max_keys", 100)
    app = create_app(clock=clock)
    client = TestClient(app)
    for n in range(500):
        client.post("/v1/me/favorites/moveman", headers={"X-Client-Id": f"browser-{n}"})

    assert len(app.state.client_storage) == 100
    latest = client.get("/v1/me/favorites", headers={"X-Client-Id": "browser-499"}).json()
    assert latest["data"]["ids"] == ["moveman"]
    first = client.get("/v1/me/favorites", headers={"X-Client-Id": "browser-0"}).json()
    assert first["data"]["ids"] == []


def test_client_state_expires_when_idle(monkeypatch, clock):
    from appylink_api.app import create_app
    from appylink_shared.config import settings
    from fastapi.testclient import TestClient

    monkeypatch.setattr(settings, "client_state_ttl", 3600.0)
    client = TestClient(create_app(clock=clock))
    client.post("/v1/me/favorites/moveman", headers=HEADERS)

    clock.advance(3599)
    assert client.get("/v1/me/favorites", headers=HEADERS).json()["data"]["ids"] == ["moveman"]
    clock.advance(1)
    assert client.get("/v1/me/favorites", headers=HEADERS).json()["data"]["ids"] == []
