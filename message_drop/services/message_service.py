import logging
from typing import List, Optional
from sqlmodel import Session
from message_drop.core.errors import DuplicateNickname, InvalidInput, MissingDrop, NotFound
from message_drop.core.security import PasswordHasher, normalize_passcode
from message_drop.models.drop import DropRead
from message_drop.models.message import MessageCreate, MessageRead, MessageWithViews
from message_drop.models.view import ViewRead
from message_drop.repositories.drop_repo import get_drop_by_user
from message_drop.repositories.message_repo import (
    create_message,
    delete_message as repo_delete_message,
    get_message_by_nickname,
    list_messages_with_view_counts,
    nicknames_by_prefix,
)
from message_drop.repositories.view_repo import list_views_by_drop

logger = logging.getLogger(__name__)

MAX_NICKNAME_LENGTH = 100
MIN_AUTOCOMPLETE_PREFIX = 4


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def add_message(
    db: Session, hasher: PasswordHasher, user_id: int, message_in: MessageCreate
) -> MessageRead:
    nickname = _clean(message_in.nickname)
    question = _clean(message_in.question)
    content = _clean(message_in.content)
    passcode = normalize_passcode(message_in.passcode or "")
    hint = _clean(message_in.hint) or None

    if not nickname or not question or not passcode or not content:
        raise InvalidInput("Nickname, question, passcode, and message are required")
    if len(nickname) > MAX_NICKNAME_LENGTH:
        raise InvalidInput("Nickname must be at most 100 characters")

    drop = get_drop_by_user(db, user_id)
    if drop is None:
        raise MissingDrop()

    if get_message_by_nickname(db, drop.id, nickname):
        raise DuplicateNickname()

    message = create_message(
        db,
        drop_id=drop.id,
        nickname=nickname,
        question=question,
        hint=hint,
        passcode_hash=hasher.hash(passcode),
        content=content,
    )
    logger.info("Added message %s to drop %s", message.id, drop.id)
    return MessageRead.model_validate(message)


def list_messages(db: Session, drop_id: int) -> List[MessageWithViews]:
    return [
        MessageWithViews.model_validate(message, update={"view_count": view_count})
        for message, view_count in list_messages_with_view_counts(db, drop_id)
    ]


def list_views(db: Session, drop_id: int) -> List[ViewRead]:
    return [ViewRead.model_validate(view) for view in list_views_by_drop(db, drop_id)]


def get_dashboard(db: Session, user_id: int) -> dict:
    """Everything the owner's dashboard shows: the drop, its messages and views."""
    drop = get_drop_by_user(db, user_id)
    if drop is None:
        return {"drop": None, "messages": [], "views": []}
    return {
        "drop": DropRead.model_validate(drop),
        "messages": list_messages(db, drop.id),
        "views": list_views(db, drop.id),
    }


def delete_message(db: Session, user_id: int, message_id: int) -> None:
    drop = get_drop_by_user(db, user_id)
    if drop is None:
        raise NotFound("No drop found")
    # deleting something that is not ours (or is already gone) is a quiet no-op
    if repo_delete_message(db, message_id, drop.id):
        logger.info("Deleted message %s from drop %s", message_id, drop.id)


def autocomplete(db: Session, username: str, prefix: Optional[str]) -> List[str]:
    prefix = _clean(prefix)
    if len(prefix) < MIN_AUTOCOMPLETE_PREFIX:
        return []
    return nicknames_by_prefix(db, username, prefix)
