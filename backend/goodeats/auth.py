"""Bearer-token dependencies for routes that need (or can use) the caller's identity."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from goodeats.database import get_db
from goodeats.errors import AuthenticationRequired
from goodeats.models.auth_session import AuthSession
from goodeats.models.user import User
from goodeats.services import auth_service

security = HTTPBearer(auto_error=False)


def get_current_session(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> AuthSession:
    if creds is None:
        raise AuthenticationRequired("Please sign in to continue")
    session = auth_service.resolve_session(db, creds.credentials)
    if session is None:
        raise AuthenticationRequired("Session is invalid or has expired")
    return session


def get_current_user(session: AuthSession = Depends(get_current_session)) -> User:
    return session.user


def get_current_user_optional(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    # No token, or a stale one, simply means an anonymous viewer
    if creds is None:
        return None
    session = auth_service.resolve_session(db, creds.credentials)
    return session.user if session else None
