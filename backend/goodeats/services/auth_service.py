"""Auth service: accounts and revocable bearer-token sessions."""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from goodeats.errors import AuthenticationRequired, Conflict
from goodeats.models.auth_session import AuthSession
from goodeats.models.user import User
from goodeats.security import (
    create_access_token, decode_access_token, hash_password, session_expiry, verify_password,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _open_session(db: Session, user: User) -> tuple[AuthSession, str]:
    session = AuthSession(user_id=user.user_id, expires_at=session_expiry())
    db.add(session)
    db.commit()
    db.refresh(session)
    token = create_access_token(user.user_id, session.session_id, _as_utc(session.expires_at))
    return session, token


def sign_up(db: Session, email: str, password: str, username: str, full_name: str):
    """Register a new account and sign it in. Returns (session, token, user)."""
    email = email.strip().lower()
    username = username.strip()
    if db.query(User).filter(User.email == email).first():
        raise Conflict("Email already registered")
    if db.query(User).filter(User.username == username).first():
        raise Conflict("Username already taken")

    user = User(
        email=email,
        username=username,
        full_name=full_name.strip(),
        password_hash=hash_password(password),
    )
    db.add(user)
    db.flush()
    session, token = _open_session(db, user)
    logger.info("Signed up user %s (%s)", user.user_id, user.username)
    return session, token, user


def sign_in(db: Session, email: str, password: str):
    """Verify credentials and open a new session. Returns (session, token, user)."""
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationRequired("Invalid email or password")
    session, token = _open_session(db, user)
    logger.info("User %s signed in (session %s)", user.user_id, session.session_id)
    return session, token, user


def sign_out(db: Session, session: AuthSession) -> None:
    session.revoked_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("User %s signed out (session %s)", session.user_id, session.session_id)


def resolve_session(db: Session, token: Optional[str]) -> Optional[AuthSession]:
    """Return the live session behind a bearer token, or None."""
    if not token:
        return None
    claims = decode_access_token(token)
    if not claims or not claims.get("sid") or not claims.get("sub"):
        return None
    session = (
        db.query(AuthSession)
        .filter(AuthSession.session_id == claims["sid"], AuthSession.user_id == claims["sub"])
        .first()
    )
    if not session or session.revoked_at is not None:
        return None
    if _as_utc(session.expires_at) <= datetime.now(timezone.utc):
        return None
    return session
