## Current user dependency
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from goalpath.auth.sessions import SESSION_COOKIE_NAME, hash_token
from goalpath.db.models.session_token import SessionToken
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import NotAuthenticated
from goalpath.settings import settings
from goalpath.utils import as_utc, utcnow


def get_raw_token(request: Request) -> str | None:
    """Session token from an `Authorization: Bearer` header, else the session cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    raw = get_raw_token(request)
    if not raw:
        raise NotAuthenticated()

    tok = (
        db.query(SessionToken)
        .filter(SessionToken.token_hash == hash_token(raw), SessionToken.revoked_at.is_(None))
        .first()
    )
    if not tok:
        raise NotAuthenticated()

    now = utcnow()
    # Absolute expiry
    if as_utc(tok.expires_at) <= now:
        raise NotAuthenticated("Session expired")

    # Idle timeout revokes the token server-side
    if as_utc(tok.last_seen_at) + timedelta(minutes=settings.session_idle_minutes) <= now:
        tok.revoked_at = now
        db.commit()
        raise NotAuthenticated("Session expired")

    tok.last_seen_at = now
    db.commit()

    user = db.query(User).filter(User.id == tok.user_id).first()
    if not user or not user.is_active:
        raise NotAuthenticated()
    return user
