"""Shared pytest fixtures: async HTTP client and auth helpers."""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import app

TEST_SECRET = "test-secret"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async client bound to the app (lifespan not run)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_enabled(monkeypatch: pytest.MonkeyPatch) -> str:
    """Turn on token verification for the duration of a test."""
    monkeypatch.setattr(settings, "auth_jwt_secret", TEST_SECRET)
    return TEST_SECRET


def make_token(sub: str = "user-1", *, secret: str = TEST_SECRET, aud: str = "authenticated", ttl: int = 60) -> str:
    payload = {"sub": sub, "aud": aud, "email": f"{sub}@example.test", "exp": int(time.time()) + ttl}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def token_factory():
    return make_token
