# message_drop/models/user.py
from typing import TYPE_CHECKING, Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime, Index, func
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from message_drop.models.drop import Drop


class Credentials(SQLModel):
    # optional so that missing fields surface as a 400 from the service layer
    username: Optional[str] = None
    password: Optional[str] = None


class UserRead(SQLModel):
    username: str


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, index=True, nullable=False, unique=True)
    password_hash: str = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    drop: Optional["Drop"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "uselist": False},
    )


# "Bob" and "bob" are the same account
Index("uq_users_username_lower", func.lower(User.username), unique=True)
