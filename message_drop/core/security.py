# message_drop/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from message_drop.core.config import Settings, get_settings
from message_drop.core.errors import Unauthenticated

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted bcrypt hashing for account passwords and message passcodes.

    The cost factor and salt travel inside each digest, so digests made
    under an older cost factor still verify.
    """

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self.context.hash(plaintext)

    def verify(self, plaintext: str, digest: Optional[str]) -> bool:
        # a malformed or missing digest is a failed match, never an error
        if not digest:
            return False
        try:
            return self.context.verify(plaintext, digest)
        except (ValueError, TypeError):
            logger.warning("Unreadable password digest; treating as mismatch")
            return False

    def dummy_verify(self) -> None:
        """Burn the same effort as a real verify when there is nothing to check."""
        self.context.dummy_verify()


def normalize_passcode(passcode: str) -> str:
    return passcode.strip().lower()


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


class SessionUser(BaseModel):
    user_id: int
    username: str


def create_access_token(settings: Settings, user_id: int, username: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode = {"sub": str(user_id), "username": username, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def resolve_access_token(settings: Settings, token: Optional[str]) -> Optional[SessionUser]:
    """
    Decode a session token. Expired, tampered or malformed tokens all
    come back as None, i.e. "not logged in".
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return SessionUser(user_id=int(payload["sub"]), username=payload["username"])
    except (JWTError, KeyError, ValueError, TypeError) as exc:
        logger.debug("Rejected session token: %s", exc)
        return None


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def get_optional_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[SessionUser]:
    return resolve_access_token(settings, request.cookies.get(settings.COOKIE_NAME))


def get_current_user(
    user: Optional[SessionUser] = Depends(get_optional_user),
) -> SessionUser:
    if user is None:
        raise Unauthenticated()
    return user
