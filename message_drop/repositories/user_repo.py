from typing import Optional
from sqlalchemy import func
from sqlmodel import Session, select
from message_drop.models.user import User

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    # usernames are unique regardless of case
    stmt = select(User).where(func.lower(User.username) == func.lower(username))
    return db.exec(stmt).first()

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

def create_user(db: Session, username: str, password_hash: str) -> User:
    db_user = User(username=username, password_hash=password_hash)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
