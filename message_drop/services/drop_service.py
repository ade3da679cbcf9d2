import logging
from typing import Optional, Tuple
from sqlmodel import Session
from message_drop.core.errors import InvalidInput, NotFound
from message_drop.models.drop import Drop, PublicDrop
from message_drop.repositories.drop_repo import (
    count_messages,
    create_drop,
    get_drop_by_user,
    get_drop_with_owner,
    update_generic_message,
)

logger = logging.getLogger(__name__)


def create_or_update_drop(
    db: Session, user_id: int, generic_message: Optional[str]
) -> Tuple[Drop, bool]:
    """
    Publish the user's drop, or replace its generic message if it already
    exists. Returns the drop and whether it was newly created.
    """
    text = (generic_message or "").strip()
    if not text:
        raise InvalidInput("Generic message is required")

    drop = get_drop_by_user(db, user_id)
    if drop is None:
        drop = create_drop(db, user_id, text)
        logger.info("Created drop %s for user %s", drop.id, user_id)
        return drop, True

    if drop.generic_message != text:
        drop = update_generic_message(db, drop, text)
        logger.info("Updated generic message of drop %s", drop.id)
    return drop, False


def get_drop_for_user(db: Session, user_id: int) -> Optional[Drop]:
    return get_drop_by_user(db, user_id)


def get_public_drop(db: Session, username: str) -> PublicDrop:
    found = get_drop_with_owner(db, username)
    if not found:
        raise NotFound("No drop found for this user")
    drop, owner_name = found
    return PublicDrop(
        username=owner_name,
        generic_message=drop.generic_message,
        message_count=count_messages(db, drop.id),
        created_at=drop.created_at,
    )
