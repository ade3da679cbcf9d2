from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import Session, select
from message_drop.models.drop import Drop
from message_drop.models.message import Message
from message_drop.models.user import User
from message_drop.models.view import View

AUTOCOMPLETE_LIMIT = 8

def get_message_by_nickname(db: Session, drop_id: int, nickname: str) -> Optional[Message]:
    stmt = select(Message).where(
        Message.drop_id == drop_id,
        func.lower(Message.nickname) == func.lower(nickname),
    )
    return db.exec(stmt).first()

def create_message(
    db: Session,
    drop_id: int,
    nickname: str,
    question: str,
    hint: Optional[str],
    passcode_hash: str,
    content: str,
) -> Message:
    message = Message(
        drop_id=drop_id,
        nickname=nickname,
        question=question,
        hint=hint,
        passcode_hash=passcode_hash,
        content=content,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message

def list_messages_with_view_counts(db: Session, drop_id: int) -> List[Tuple[Message, int]]:
    """Newest first, each paired with how many times it has been unlocked."""
    view_count = (
        select(func.count(View.id))
        .where(View.message_id == Message.id)
        .correlate(Message)
        .scalar_subquery()
    )
    stmt = (
        select(Message, view_count)
        .where(Message.drop_id == drop_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
    )
    return db.exec(stmt).all()

def delete_message(db: Session, message_id: int, drop_id: int) -> bool:
    # scoped by drop so an owner can only remove their own messages
    message = db.get(Message, message_id)
    if not message or message.drop_id != drop_id:
        return False
    db.delete(message)
    db.commit()
    return True

def find_for_unlock(db: Session, username: str, nickname: str) -> Optional[Message]:
    stmt = (
        select(Message)
        .join(Drop, Message.drop_id == Drop.id)
        .join(User, Drop.user_id == User.id)
        .where(
            func.lower(User.username) == func.lower(username),
            func.lower(Message.nickname) == func.lower(nickname),
        )
    )
    return db.exec(stmt).first()

def nicknames_by_prefix(db: Session, username: str, prefix: str) -> List[str]:
    stmt = (
        select(Message.nickname)
        .join(Drop, Message.drop_id == Drop.id)
        .join(User, Drop.user_id == User.id)
        .where(
            func.lower(User.username) == func.lower(username),
            func.lower(Message.nickname).startswith(prefix.lower(), autoescape=True),
        )
        .order_by(Message.nickname)
        .limit(AUTOCOMPLETE_LIMIT)
    )
    return db.exec(stmt).all()
