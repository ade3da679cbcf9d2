from typing import List
from sqlmodel import Session, select
from message_drop.models.message import Message
from message_drop.models.view import View

def record_view(db: Session, message_id: int, nickname: str) -> View:
    view = View(message_id=message_id, nickname=nickname)
    db.add(view)
    db.commit()
    db.refresh(view)
    return view

def list_views_by_drop(db: Session, drop_id: int) -> List[View]:
    stmt = (
        select(View)
        .join(Message, View.message_id == Message.id)
        .where(Message.drop_id == drop_id)
        .order_by(View.viewed_at.desc(), View.id.desc())
    )
    return db.exec(stmt).all()
