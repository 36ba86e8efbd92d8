import jwt
from typing import Optional
from fastapi import Cookie, Header, HTTPException
from app.config import settings

def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None

def decode_access_token(token: str) -> dict:
    """Verify an access token issued by the auth provider."""
    return jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=["HS256"],
        audience=settings.auth_jwt_audience,
    )

def _user_from_token(token: Optional[str]):
    if not token:
        raise HTTPException(401, "Missing token")
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise HTTPException(401, "Invalid token")
    uid = payload.get("sub")
    if not uid:
        raise HTTPException(401, "Invalid token")
    return {"id": uid, "email": payload.get("email"), "token": token}

async def current_user(authorization: Optional[str] = Header(None)):
    """API and /auth routes: bearer header only, no ambient cookie credential."""
    # auth off (no provider secret configured): the app is open
    if not settings.auth_enabled:
        return None
    return _user_from_token(bearer_token(authorization))

async def form_user(
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None),
):
    """Rendered form routes: the browser session cookie is accepted here only."""
    if not settings.auth_enabled:
        return None
    return _user_from_token(bearer_token(authorization) or access_token)
