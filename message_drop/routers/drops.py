# message_drop/routers/drops.py
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlmodel import Session
from message_drop.core.errors import InvalidInput
from message_drop.core.security import PasswordHasher, SessionUser, get_current_user, get_hasher
from message_drop.database import get_db
from message_drop.models.drop import Dashboard, DropCreate, DropSaved
from message_drop.models.message import MessageCreate, MessageRead
from message_drop.services.drop_service import create_or_update_drop
from message_drop.services.message_service import (
    add_message,
    delete_message as svc_delete_message,
    get_dashboard,
)

# largest value a 64-bit integer primary key can hold
MAX_ID = 2**63 - 1

router = APIRouter(prefix="/drops", tags=["drops"])


@router.post(
    "",
    response_model=DropSaved,
    status_code=status.HTTP_200_OK,
    summary="Publish or update the current user's drop",
)
def save_drop(
    drop_in: DropCreate,
    response: Response,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Creates the drop on first publish (201), afterwards replaces its
    generic message (200).
    """
    drop, created = create_or_update_drop(db, current_user.user_id, drop_in.generic_message)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return DropSaved(drop_id=drop.id, username=current_user.username)


@router.get(
    "/mine",
    response_model=Dashboard,
    summary="The current user's drop, its messages and who viewed them",
)
def my_drop(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_dashboard(db, current_user.user_id)


@router.post(
    "/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
)
def create_message(
    message_in: MessageCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return add_message(db, hasher, current_user.user_id, message_in)


@router.delete("/messages", summary="Delete a message, id given as a query parameter")
def delete_message(
    message_id: Optional[int] = Query(None, alias="id", ge=1, le=MAX_ID),
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if message_id is None:
        raise InvalidInput("Message ID required")
    svc_delete_message(db, current_user.user_id, message_id)
    return {"success": True}


@router.delete("/messages/{message_id}", summary="Delete a message by path id")
def delete_message_by_path(
    message_id: int = Path(..., ge=1, le=MAX_ID, description="The ID of the message to delete"),
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc_delete_message(db, current_user.user_id, message_id)
    return {"success": True}
