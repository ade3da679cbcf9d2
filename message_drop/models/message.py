# message_drop/models/message.py
from typing import TYPE_CHECKING, List, Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from message_drop.models.drop import Drop
    from message_drop.models.view import View


class MessageCreate(SQLModel):
    nickname: Optional[str] = None
    question: Optional[str] = None
    hint: Optional[str] = None
    passcode: Optional[str] = None
    content: Optional[str] = None


class MessageBase(SQLModel):
    nickname: str = Field(max_length=100, nullable=False)
    question: str = Field(nullable=False)
    hint: Optional[str] = None
    content: str = Field(nullable=False)


class MessageRead(MessageBase):
    """Owner-facing projection; the passcode hash never leaves the server."""

    id: int
    drop_id: int
    created_at: datetime


class MessageWithViews(MessageRead):
    view_count: int = 0


class Message(MessageBase, table=True):
    __tablename__ = "messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    drop_id: int = Field(foreign_key="drops.id", ondelete="CASCADE", nullable=False, index=True)
    passcode_hash: str = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    drop: Optional["Drop"] = Relationship(back_populates="messages")
    views: List["View"] = Relationship(
        back_populates="message",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class UnlockAttempt(SQLModel):
    nickname: Optional[str] = None
    # blank or missing means "just show me the question"
    passcode: Optional[str] = None


class UnlockResult(SQLModel):
    found: bool
    question: str
    hint: Optional[str] = None
    content: Optional[str] = None
