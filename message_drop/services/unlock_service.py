import logging
from typing import Optional
from sqlmodel import Session
from message_drop.core.errors import InvalidInput, NotFound
from message_drop.core.security import PasswordHasher, normalize_passcode
from message_drop.models.message import UnlockResult
from message_drop.repositories.message_repo import find_for_unlock
from message_drop.repositories.view_repo import record_view

logger = logging.getLogger(__name__)


def check_message(
    db: Session,
    hasher: PasswordHasher,
    username: str,
    nickname: Optional[str],
    passcode: Optional[str],
) -> UnlockResult:
    """
    Resolve a visitor's nickname within a drop and, if they supplied an
    answer, try it against the message's passcode.

    Without a passcode this only reveals the question and hint. A correct
    passcode reveals the content and logs a view; a wrong one leaves
    ``content`` empty and may be retried.
    """
    nickname = (nickname or "").strip()
    if not nickname:
        raise InvalidInput("Nickname and answer required")

    message = find_for_unlock(db, username, nickname)
    if message is None:
        raise NotFound("No message found for that name")

    result = UnlockResult(found=True, question=message.question, hint=message.hint)

    answer = normalize_passcode(passcode or "")
    if not answer:
        return result

    if not hasher.verify(answer, message.passcode_hash):
        logger.info("Wrong answer for message %s", message.id)
        return result

    record_view(db, message.id, nickname)
    logger.info("Message %s unlocked by %s", message.id, nickname)
    result.content = message.content
    return result
