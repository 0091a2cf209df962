# Authentication routes (register/login/logout/me)
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from goalpath.auth.deps import get_current_user, get_raw_token
from goalpath.auth.hashing import hash_password, verify_password
from goalpath.auth.schemas import Credentials, TokenOut, UserOut
from goalpath.auth.sessions import SESSION_COOKIE_NAME, absolute_expiry, hash_token, new_raw_token
from goalpath.db.models.session_token import SessionToken
from goalpath.db.models.user import User
from goalpath.deps import get_db
from goalpath.errors import Conflict, NotAuthenticated
from goalpath.settings import settings
from goalpath.utils import utcnow

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(body: Credentials, db: Session = Depends(get_db)):
    email_norm = body.email.strip().lower()
    if db.query(User).filter(User.email == email_norm).first():
        raise Conflict("Email already registered")

    user = User(email=email_norm, password_hash=hash_password(body.password), is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/login", response_model=TokenOut)
def login(body: Credentials, response: Response, db: Session = Depends(get_db)):
    email_norm = body.email.strip().lower()
    user = db.query(User).filter(User.email == email_norm).first()
    if not user or not verify_password(body.password, user.password_hash):
        raise NotAuthenticated("Invalid email or password")

    raw = new_raw_token()
    db.add(
        SessionToken(
            user_id=user.id,
            token_hash=hash_token(raw),
            expires_at=absolute_expiry(),
            last_seen_at=utcnow(),
        )
    )
    db.commit()

    # httpOnly always; secure only in prod where we sit behind HTTPS
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=raw,
        httponly=True,
        secure=(settings.env == "prod"),
        samesite="lax",
        max_age=60 * 60 * 24 * settings.session_absolute_days,
        path="/",
    )
    return TokenOut(access_token=raw)


@router.post("/logout", status_code=204)
def logout(request: Request, db: Session = Depends(get_db)):
    raw = get_raw_token(request)
    if raw:
        tok = (
            db.query(SessionToken)
            .filter(SessionToken.token_hash == hash_token(raw), SessionToken.revoked_at.is_(None))
            .first()
        )
        if tok:
            tok.revoked_at = utcnow()
            db.commit()

    resp = Response(status_code=204)
    resp.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return resp


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
