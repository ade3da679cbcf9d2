# message_drop/models/view.py
from typing import TYPE_CHECKING, Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from message_drop.models.message import Message


class ViewRead(SQLModel):
    nickname: str
    viewed_at: datetime
    message_id: int


class View(SQLModel, table=True):
    __tablename__ = "views"

    id: Optional[int] = Field(default=None, primary_key=True)
    message_id: int = Field(
        foreign_key="messages.id", ondelete="CASCADE", nullable=False, index=True
    )
    nickname: str = Field(max_length=100, nullable=False)
    viewed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    message: Optional["Message"] = Relationship(back_populates="views")
