import logging
import re
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from message_drop.core.errors import DuplicateUsername, InvalidInput, Unauthenticated
from message_drop.core.security import PasswordHasher
from message_drop.models.user import User
from message_drop.repositories.user_repo import (
    get_user_by_username,
    create_user as repo_create_user,
)

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_-]{3,30}")
MIN_PASSWORD_LENGTH = 6

# one message for both unknown user and wrong password
INVALID_CREDENTIALS = "Invalid username or password"


def validate_registration(username: Optional[str], password: Optional[str]) -> None:
    if not username or not password:
        raise InvalidInput("Username and password required")
    if not 3 <= len(username) <= 30:
        raise InvalidInput("Username must be 3-30 characters")
    if not USERNAME_PATTERN.fullmatch(username):
        raise InvalidInput(
            "Username can only contain letters, numbers, hyphens, underscores"
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput("Password must be at least 6 characters")


def register_user(
    db: Session, hasher: PasswordHasher, username: Optional[str], password: Optional[str]
) -> User:
    validate_registration(username, password)

    if get_user_by_username(db, username):
        raise DuplicateUsername()

    try:
        user = repo_create_user(db, username, hasher.hash(password))
    except IntegrityError:
        # lost a race with a registration of the same name
        db.rollback()
        raise DuplicateUsername()
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate_user(
    db: Session, hasher: PasswordHasher, username: Optional[str], password: Optional[str]
) -> User:
    if not username or not password:
        raise InvalidInput("Username and password required")

    user = get_user_by_username(db, username)
    if user is None:
        hasher.dummy_verify()
        logger.info("Login failed for %s", username)
        raise Unauthenticated(INVALID_CREDENTIALS)
    if not hasher.verify(password, user.password_hash):
        logger.info("Login failed for %s", username)
        raise Unauthenticated(INVALID_CREDENTIALS)
    return user


def find_by_username(db: Session, username: str) -> Optional[User]:
    return get_user_by_username(db, username)
