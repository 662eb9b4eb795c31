"""
Auth dependency — shared across all protected endpoints.

The session token is a signed JWT carried in the session cookie set by
/auth/google/callback. A bearer header is accepted too, for API clients.

Usage in any route:
    from halfstar.deps.auth import get_current_user
    from halfstar.db.models import User

    @router.get("/protected")
    def protected(user: User = Depends(get_current_user)):
        ...
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from halfstar.core.config import settings
from halfstar.core.security import decode_access_token
from halfstar.db.models import User
from halfstar.db.session import get_db
from halfstar.services.identity_service import get_user_by_id

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_user(
    cookie_token: str | None = Depends(session_cookie),
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Return the signed-in user, or None for anonymous requests."""
    token = bearer.credentials if bearer is not None else cookie_token
    if not token:
        return None

    sub = decode_access_token(token)
    if sub is None:
        return None

    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        return None

    return get_user_by_id(db, user_id)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    """
    Return the signed-in user.

    Raises 401 on any failure (missing/invalid token, unknown user).
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": {"code": "NOT_AUTHENTICATED", "message": "Not authenticated"}},
        )
    return user
