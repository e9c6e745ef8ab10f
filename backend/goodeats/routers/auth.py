"""Auth API routes: sign up, sign in, sign out, current session."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from goodeats.auth import get_current_session
from goodeats.database import get_db
from goodeats.models.auth_session import AuthSession
from goodeats.schemas.auth import SessionOut, SignInRequest, SignUpRequest, TokenResponse
from goodeats.services import auth_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, db: Session = Depends(get_db)):
    """Create an account and return a token for its first session."""
    session, token, user = auth_service.sign_up(
        db,
        email=payload.email,
        password=payload.password,
        username=payload.username,
        full_name=payload.full_name,
    )
    return {"access_token": token, "expires_at": session.expires_at, "user": user}


@router.post("/signin", response_model=TokenResponse)
def sign_in(payload: SignInRequest, db: Session = Depends(get_db)):
    session, token, user = auth_service.sign_in(db, email=payload.email, password=payload.password)
    return {"access_token": token, "expires_at": session.expires_at, "user": user}


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)):
    """Revoke the session behind the presented token."""
    auth_service.sign_out(db, session)


@router.get("/session", response_model=SessionOut)
def current_session(session: AuthSession = Depends(get_current_session)):
    return {"session_id": session.session_id, "expires_at": session.expires_at, "user": session.user}
