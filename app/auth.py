from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
import httpx
import structlog

from app.config import settings
from app.security import bearer_token, current_user

router = APIRouter()
log = structlog.get_logger("cropsmart.auth")

async def revoke_session(token: str) -> None:
    """Ask the auth provider to end the session. Fire-and-forget: failures are only logged."""
    if not settings.auth_url:
        return
    url = f"{settings.auth_url.rstrip('/')}/auth/v1/logout"
    headers = {"apikey": settings.auth_anon_key, "Authorization": f"Bearer {token}"}
    try:
        async with httpx.AsyncClient(timeout=settings.auth_timeout_seconds) as client:
            r = await client.post(url, headers=headers)
        if r.status_code >= 400:
            log.warning("signout_rejected", status_code=r.status_code)
    except httpx.HTTPError as exc:
        log.warning("signout_failed", error=str(exc))

# ---------- Me ----------
@router.get("/me")
async def me(user = Depends(current_user)):
    if user is None:
        raise HTTPException(404, "Authentication is disabled")
    return {"id": user["id"], "email": user.get("email")}

# ---------- Sign out ----------
@router.post("/signout")
async def signout(request: Request):
    token: Optional[str] = bearer_token(request.headers.get("authorization")) or request.cookies.get("access_token")
    if token:
        await revoke_session(token)
    log.info("signout", forwarded=bool(token and settings.auth_url))

    # the rendered form posts here; send it back to the page
    if request.headers.get("content-type", "").startswith("application/x-www-form-urlencoded"):
        resp = RedirectResponse("/", status_code=303)
    else:
        resp = JSONResponse({"ok": True})
    resp.delete_cookie("access_token")
    return resp
