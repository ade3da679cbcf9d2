# message_drop/routers/public.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query
from sqlmodel import Session
from message_drop.core.security import PasswordHasher, get_hasher
from message_drop.database import get_db
from message_drop.models.drop import PublicDrop
from message_drop.models.message import UnlockAttempt, UnlockResult
from message_drop.services.drop_service import get_public_drop
from message_drop.services.message_service import autocomplete as svc_autocomplete
from message_drop.services.unlock_service import check_message

router = APIRouter(prefix="/drop", tags=["public"])


@router.get("/{username}", response_model=PublicDrop)
def read_public_drop(
    username: str = Path(..., description="Owner of the drop"),
    db: Session = Depends(get_db),
):
    """
    The public face of a drop: its generic message and how many
    secret messages it holds. Never exposes message contents.
    """
    return get_public_drop(db, username)


@router.get("/{username}/autocomplete", response_model=List[str])
def autocomplete(
    username: str = Path(...),
    q: Optional[str] = Query(None, description="Nickname prefix, at least 4 characters"),
    db: Session = Depends(get_db),
):
    return svc_autocomplete(db, username, q)


@router.post("/{username}/check", response_model=UnlockResult)
def check(
    attempt: UnlockAttempt,
    username: str = Path(...),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    """
    Look up the visitor's message by nickname and try their answer.
    Leave ``passcode`` empty to only fetch the question and hint.
    """
    return check_message(db, hasher, username, attempt.nickname, attempt.passcode)
