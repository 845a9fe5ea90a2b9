"""OAuth authentication routes."""

from __future__ import annotations

from authlib.integrations.starlette_client import OAuth, OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger
from sqlmodel import Session

from ...core import (
    FRONTEND_ORIGIN,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    OAUTH_REDIRECT_URL,
    get_session,
)
from ...services.judges import Identity, find_judge, get_or_create_judge, judge_to_dict

router = APIRouter(tags=["auth"])

oauth = OAuth()

oauth.register(
    name="google",
    # Placeholders let the app boot without credentials; /auth/google/start refuses.
    client_id=GOOGLE_CLIENT_ID or "dummy",
    client_secret=GOOGLE_CLIENT_SECRET or "dummy",
    server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
    client_kwargs={"scope": "openid email profile"},
)


@router.get("/auth/google/start")
async def auth_google_start(request: Request, next: str | None = None):
    if not GOOGLE_CLIENT_ID or not GOOGLE_CLIENT_SECRET:
        raise HTTPException(
            status_code=500,
            detail="Google OAuth not configured. Check GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET.",
        )

    if next:
        request.session["next"] = next
    return await oauth.google.authorize_redirect(request, OAUTH_REDIRECT_URL)


@router.get("/auth/google/callback")
async def auth_google_callback(
    request: Request, session: Session = Depends(get_session)
):
    try:
        token = await oauth.google.authorize_access_token(request)
    except OAuthError as exc:
        logger.warning("Google OAuth callback failed: {}", exc.error)
        raise HTTPException(status_code=400, detail="Google sign-in failed.") from exc

    userinfo = token.get("userinfo") or await oauth.google.parse_id_token(request, token)
    email = userinfo.get("email")
    sub = userinfo.get("sub")
    name = userinfo.get("name") or (email.split("@")[0] if email else None)
    if not email or not sub:
        raise HTTPException(status_code=400, detail="Unable to read Google profile.")

    judge = get_or_create_judge(
        session, Identity(external_id=sub, name=name, email=email)
    )
    request.session["uid"] = judge.external_id
    request.session["name"] = judge.name
    request.session["email"] = judge.email

    next_url = request.session.pop("next", None) or FRONTEND_ORIGIN
    if not str(next_url).startswith(FRONTEND_ORIGIN):
        next_url = FRONTEND_ORIGIN
    return RedirectResponse(next_url, status_code=302)


@router.post("/auth/logout")
def auth_logout(request: Request):
    request.session.clear()
    return JSONResponse({"ok": True})


@router.get("/me")
def me(request: Request, session: Session = Depends(get_session)):
    uid = request.session.get("uid")
    if not uid:
        return JSONResponse({"judge": None})
    judge = find_judge(session, str(uid))
    if not judge:
        request.session.clear()
        return JSONResponse({"judge": None})
    return JSONResponse({"judge": judge_to_dict(judge)})


__all__ = ["router"]
