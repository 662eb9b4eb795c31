"""
Identity business logic — map a Google profile to a local user.

All DB writes go through this layer (not directly in routes).
"""
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from halfstar.db.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalProfile:
    """Profile as reported by the identity provider."""

    id: str
    display_name: str | None = None
    emails: list[str] = field(default_factory=list)
    photos: list[str] = field(default_factory=list)

    @classmethod
    def from_userinfo(cls, userinfo: dict) -> "ExternalProfile":
        """Build from an OpenID Connect userinfo payload (sub, name, email, picture)."""
        sub = userinfo.get("sub")
        if not sub:
            raise ValueError("userinfo has no 'sub' claim")
        email = userinfo.get("email")
        picture = userinfo.get("picture")
        return cls(
            id=str(sub),
            display_name=userinfo.get("name"),
            emails=[email] if email else [],
            photos=[picture] if picture else [],
        )


def find_or_create_user(db: Session, profile: ExternalProfile) -> User:
    """
    Return the user for *profile*, creating it on first sight.

    The unique index on google_id guarantees a single row per identity; if
    a concurrent sign-in wins the insert, its row is returned instead.
    """
    existing = get_user_by_google_id(db, profile.id)
    if existing is not None:
        return existing

    user = User(
        google_id=profile.id,
        name=profile.display_name,
        email=profile.emails[0] if profile.emails else None,
        picture=profile.photos[0] if profile.photos else None,
    )
    db.add(user)

    try:
        db.flush()  # trigger INSERT; raises on duplicate
    except IntegrityError:
        db.rollback()
        winner = get_user_by_google_id(db, profile.id)
        if winner is None:
            raise
        return winner

    db.commit()
    db.refresh(user)
    logger.info("Created user %s for external identity %s", user.id, profile.id)
    return user


def get_user_by_google_id(db: Session, google_id: str) -> User | None:
    return db.query(User).filter(User.google_id == google_id).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Fetch a single user by primary key."""
    return db.query(User).filter(User.id == user_id).first()
