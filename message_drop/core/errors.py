# message_drop/core/errors.py
from typing import Optional

from fastapi import status


class DropError(Exception):
    """Base for failures that map onto a client-visible HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class InvalidInput(DropError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input"


class MissingDrop(InvalidInput):
    detail = "Create a drop first"


class Unauthenticated(DropError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not logged in"


class Conflict(DropError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Already exists"


class DuplicateUsername(Conflict):
    detail = "Username already taken"


class DuplicateNickname(Conflict):
    detail = "A message for this nickname already exists"


class NotFound(DropError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"
