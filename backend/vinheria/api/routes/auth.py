import logging
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from pydantic import BaseModel
from vinheria.core.config import settings
from vinheria.core.database import get_db
from vinheria.core.security import sign_session_handle
from vinheria.api.dependencies import get_session_handle, require_identity
from vinheria.services.credential_store import credential_store, normalize_email
from vinheria.services.credential_verifier import VerifiedIdentity, credential_verifier
from vinheria.services.session_manager import session_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class UserCreate(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str


class IdentityResponse(BaseModel):
    user_id: int
    email: str


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    # DuplicateIdentity / InvalidInput propagate to the app's error handlers
    user_id = credential_store.register(db, user_data.email, user_data.password)
    return UserResponse(id=user_id, email=normalize_email(user_data.email))


@router.post("/login")
def login(
    email: str = Form(""),
    password: str = Form(""),
    access_token: str = Form(""),
    db: Session = Depends(get_db)
):
    """Log in with password and the shared access token, then open a session"""
    identity = credential_verifier.verify_login(
        db,
        email,
        password,
        access_token,
        settings.get_access_token(),
    )

    handle = session_manager.create(identity)
    record = session_manager.get(handle)
    logger.info(f"User {identity.user_id} logged in")

    response = RedirectResponse(url="/inventory", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_handle(handle, record.expires_at),
        max_age=settings.SESSION_TTL_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response


@router.post("/logout")
async def logout(request: Request):
    """End the current session; safe to call without one"""
    session_manager.destroy(get_session_handle(request))
    response = RedirectResponse(url=settings.LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=IdentityResponse)
async def get_current_identity(identity: VerifiedIdentity = Depends(require_identity)):
    """Get the identity bound to the current session"""
    return IdentityResponse(user_id=identity.user_id, email=identity.email)
