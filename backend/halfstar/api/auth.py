"""
Auth API — /auth
─────────────────
Endpoints:
  GET  /auth/google            — Redirect to Google consent screen
  GET  /auth/google/callback   — Finish sign-in, set session cookie, redirect /
  GET  /auth/logout            — Clear session cookie, redirect /
"""
import logging

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from halfstar.core.config import settings
from halfstar.core.security import create_access_token
from halfstar.db.session import get_db
from halfstar.services.identity_service import ExternalProfile, find_or_create_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: RedirectResponse, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=not settings.is_dev,
    )


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/google")
async def login_google(request: Request):
    """Start the OAuth code flow."""
    redirect_uri = settings.GOOGLE_REDIRECT_URI or str(request.url_for("google_callback"))
    return await request.app.state.oauth.google.authorize_redirect(request, redirect_uri)


@router.get("/google/callback", name="google_callback")
async def google_callback(request: Request, db: Session = Depends(get_db)) -> RedirectResponse:
    """
    Exchange the authorization code, resolve the local user and start a session.

    Any OAuth failure sends the browser back to / without a session.
    """
    google = request.app.state.oauth.google
    try:
        token = await google.authorize_access_token(request)
        userinfo = token.get("userinfo") or await google.userinfo(token=token)
        profile = ExternalProfile.from_userinfo(dict(userinfo))
    except (OAuthError, ValueError) as exc:
        logger.warning("Google sign-in failed: %s", exc)
        return RedirectResponse("/", status_code=302)

    user = find_or_create_user(db, profile)
    response = RedirectResponse("/", status_code=302)
    _set_session_cookie(response, create_access_token(subject=user.id))
    return response


@router.get("/logout")
def logout() -> RedirectResponse:
    response = RedirectResponse("/", status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
