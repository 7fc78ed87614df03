"""Ownership rule: only a resource's author may change or delete it."""

from __future__ import annotations

import uuid

from postboard.auth.dependencies import AuthenticatedUser
from postboard.exceptions import ForbiddenError


def is_owner(author_id: uuid.UUID, user: AuthenticatedUser) -> bool:
    return author_id == user.user_id


def ensure_owner(author_id: uuid.UUID, user: AuthenticatedUser, message: str) -> None:
    """Raise ``ForbiddenError(message)`` unless ``user`` authored the resource."""
    if not is_owner(author_id, user):
        raise ForbiddenError(
            message=message,
            context={"author_id": str(author_id), "user_id": str(user.user_id)},
        )
