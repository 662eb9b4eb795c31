"""
Auth response schemas.
"""
from pydantic import BaseModel, ConfigDict


class MeResponse(BaseModel):
    """Public-facing profile of the signed-in user."""

    name: str | None = None
    email: str | None = None
    picture: str | None = None

    model_config = ConfigDict(from_attributes=True)
