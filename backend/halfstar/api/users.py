"""
Current user — /api/me
"""
from fastapi import APIRouter, Depends

from halfstar.db.models import User
from halfstar.deps.auth import get_optional_user
from halfstar.schemas.auth import MeResponse

router = APIRouter()


@router.get("/me", response_model=MeResponse | None)
def me(current_user: User | None = Depends(get_optional_user)) -> MeResponse | None:
    """Return the signed-in user's profile, or null when anonymous."""
    if current_user is None:
        return None
    return MeResponse.model_validate(current_user)
