from __future__ import annotations

import httpx
import pytest
from httpx import AsyncClient

from app import auth as auth_module
from app.auth import revoke_session
from app.config import settings

PREDICT_BODY = {"crop": "Wheat", "soilType": "Loam", "month": 10}


@pytest.mark.asyncio
async def test_open_when_auth_disabled(client: AsyncClient) -> None:
    response = await client.post("/api/predict", json=PREDICT_BODY)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_me_unavailable_when_auth_disabled(client: AsyncClient) -> None:
    response = await client.get("/auth/me")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_token_rejected(client: AsyncClient, auth_enabled: str) -> None:
    response = await client.post("/api/predict", json=PREDICT_BODY)
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing token"


@pytest.mark.asyncio
async def test_form_page_requires_token(client: AsyncClient, auth_enabled: str) -> None:
    response = await client.get("/")
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs", [{"secret": "other-secret"}, {"aud": "anon"}, {"ttl": -60}])
async def test_invalid_token_rejected(client: AsyncClient, auth_enabled: str, token_factory, kwargs) -> None:
    token = token_factory(**kwargs)
    response = await client.post("/api/predict", json=PREDICT_BODY, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_valid_bearer_token(client: AsyncClient, auth_enabled: str, token_factory) -> None:
    headers = {"Authorization": f"Bearer {token_factory('farmer-7')}"}
    response = await client.post("/api/predict", json=PREDICT_BODY, headers=headers)
    assert response.status_code == 200
    assert response.json()["level"] == "high"

    me = await client.get("/auth/me", headers=headers)
    assert me.json() == {"id": "farmer-7", "email": "farmer-7@example.test"}


@pytest.mark.asyncio
async def test_session_cookie_accepted(client: AsyncClient, auth_enabled: str, token_factory) -> None:
    response = await client.get("/", headers={"Cookie": f"access_token={token_factory()}"})
    assert response.status_code == 200
    assert "Sign Out" in response.text


@pytest.mark.asyncio
async def test_cookie_ignored_on_cross_origin_me(client: AsyncClient, auth_enabled: str, token_factory) -> None:
    headers = {"Origin": "https://evil.example", "Cookie": f"access_token={token_factory('farmer-7')}"}
    response = await client.get("/auth/me", headers=headers)
    assert response.status_code == 401
    assert "farmer-7" not in response.text
    assert response.headers.get("access-control-allow-credentials") != "true"


@pytest.mark.asyncio
async def test_cookie_ignored_on_api(client: AsyncClient, auth_enabled: str, token_factory) -> None:
    headers = {"Origin": "https://evil.example", "Cookie": f"access_token={token_factory()}"}
    response = await client.post("/api/predict", json=PREDICT_BODY, headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing token"


@pytest.mark.asyncio
async def test_wildcard_origin_preflight_without_credentials(client: AsyncClient) -> None:
    response = await client.options(
        "/api/predict",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert "access-control-allow-credentials" not in response.headers


def _mock_provider(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(auth_module.httpx, "AsyncClient", factory)


@pytest.mark.asyncio
async def test_signout_forwards_to_provider(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    monkeypatch.setattr(settings, "auth_url", "https://auth.example.test/")
    monkeypatch.setattr(settings, "auth_anon_key", "anon-key")
    _mock_provider(monkeypatch, handler)

    response = await client.post("/auth/signout", headers={"Authorization": "Bearer tok-123"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://auth.example.test/auth/v1/logout"
    assert seen[0].headers["apikey"] == "anon-key"
    assert seen[0].headers["authorization"] == "Bearer tok-123"


@pytest.mark.asyncio
async def test_signout_swallows_provider_errors(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("provider down", request=request)

    monkeypatch.setattr(settings, "auth_url", "https://auth.example.test")
    _mock_provider(monkeypatch, handler)

    response = await client.post("/auth/signout", headers={"Authorization": "Bearer tok-123"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_signout_from_form_redirects(client: AsyncClient) -> None:
    response = await client.post("/auth/signout", data={"submit": "1"}, headers={"Cookie": "access_token=tok-123"})
    assert response.status_code == 303
    assert response.headers["location"] == "/"


@pytest.mark.asyncio
async def test_revoke_session_noop_without_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("provider should not be called")

    monkeypatch.setattr(settings, "auth_url", "")
    _mock_provider(monkeypatch, handler)
    await revoke_session("tok-123")
