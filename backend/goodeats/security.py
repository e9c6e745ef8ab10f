"""Password hashing and access-token encoding."""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from goodeats.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    # bcrypt only reads the first 72 bytes; sign-up refuses anything longer
    try:
        if password and len(password.encode("utf-8")) > 72:
            return False
        return pwd_context.verify(password, hashed)
    except ValueError:
        return False


def create_access_token(user_id: str, session_id: str, expires_at: datetime) -> str:
    to_encode = {"sub": user_id, "sid": session_id, "exp": expires_at}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """Return the token claims, or None if the token is malformed or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def session_expiry(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
