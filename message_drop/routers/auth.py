# message_drop/routers/auth.py
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from message_drop.core.config import Settings, get_settings
from message_drop.core.security import (
    PasswordHasher,
    SessionUser,
    clear_session_cookie,
    create_access_token,
    get_current_user,
    get_hasher,
    set_session_cookie,
)
from message_drop.database import get_db
from message_drop.models.user import Credentials, UserRead
from message_drop.services.user_service import authenticate_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register(
    creds: Credentials,
    response: Response,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
):
    """
    Create an account and log it in straight away.
    """
    user = register_user(db, hasher, creds.username, creds.password)
    set_session_cookie(response, settings, create_access_token(settings, user.id, user.username))
    return UserRead(username=user.username)


@router.post("/login", response_model=UserRead)
def login(
    creds: Credentials,
    response: Response,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
):
    user = authenticate_user(db, hasher, creds.username, creds.password)
    set_session_cookie(response, settings, create_access_token(settings, user.id, user.username))
    logger.info("User %s logged in", user.username)
    return UserRead(username=user.username)


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return {"success": True}


@router.get("/me", response_model=UserRead)
def me(current_user: SessionUser = Depends(get_current_user)):
    return UserRead(username=current_user.username)
