from typing import Optional, Tuple
from sqlalchemy import func
from sqlmodel import Session, select
from message_drop.models.drop import Drop
from message_drop.models.message import Message
from message_drop.models.user import User

def get_drop_by_user(db: Session, user_id: int) -> Optional[Drop]:
    stmt = select(Drop).where(Drop.user_id == user_id)
    return db.exec(stmt).first()

def get_drop_with_owner(db: Session, username: str) -> Optional[Tuple[Drop, str]]:
    """
    Look a drop up by its owner's username (any case).
    Returns the drop together with the username as it was registered.
    """
    stmt = (
        select(Drop, User.username)
        .join(User, Drop.user_id == User.id)
        .where(func.lower(User.username) == func.lower(username))
    )
    return db.exec(stmt).first()

def count_messages(db: Session, drop_id: int) -> int:
    stmt = select(func.count(Message.id)).where(Message.drop_id == drop_id)
    return db.exec(stmt).one()

def create_drop(db: Session, user_id: int, generic_message: str) -> Drop:
    drop = Drop(user_id=user_id, generic_message=generic_message)
    db.add(drop)
    db.commit()
    db.refresh(drop)
    return drop

def update_generic_message(db: Session, drop: Drop, generic_message: str) -> Drop:
    drop.generic_message = generic_message
    db.add(drop)
    db.commit()
    db.refresh(drop)
    return drop
