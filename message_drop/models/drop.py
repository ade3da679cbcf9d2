# message_drop/models/drop.py
from typing import TYPE_CHECKING, List, Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlmodel import SQLModel, Field, Relationship
from message_drop.models.message import Message, MessageWithViews
from message_drop.models.view import ViewRead

if TYPE_CHECKING:
    from message_drop.models.user import User


class DropCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generic_message: Optional[str] = PydanticField(default=None, alias="genericMessage")


class DropSaved(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    drop_id: int = PydanticField(alias="dropId")
    username: str


class PublicDrop(BaseModel):
    """The only view of a drop handed to anonymous visitors."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    generic_message: str = PydanticField(alias="genericMessage")
    message_count: int = PydanticField(alias="messageCount")
    created_at: datetime = PydanticField(alias="createdAt")


class DropRead(SQLModel):
    id: int
    user_id: int
    generic_message: str
    created_at: datetime


class Drop(SQLModel, table=True):
    __tablename__ = "drops"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, unique=True, index=True
    )
    generic_message: str = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    owner: Optional["User"] = Relationship(back_populates="drop")
    messages: List["Message"] = Relationship(
        back_populates="drop",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class Dashboard(SQLModel):
    drop: Optional[DropRead] = None
    messages: List[MessageWithViews] = []
    views: List[ViewRead] = []
