"""
Helpers shared by the resource services: id parsing, required-field checks
and translation of SQLAlchemy failures into DatabaseError.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from postboard.exceptions import DatabaseError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def parse_resource_id(raw: str, not_found_message: str, resource: str) -> uuid.UUID:
    """
    Parse a path identifier. A string that is not a UUID cannot name any
    stored row, so it is reported as not found rather than as bad input.
    """
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFoundError(message=not_found_message, resource=resource, resource_id=str(raw))


def try_parse_id(raw: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def require_fields(message: str, **fields: Optional[str]) -> None:
    """Raise ValidationError(message) if any field is None or empty."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(message=message, field=missing[0], context={"missing": missing})


@contextmanager
def database_errors(action: str, **context: Any) -> Iterator[None]:
    """
    Convert SQLAlchemy failures raised inside the block into DatabaseError.

    Application exceptions (NotFoundError, ForbiddenError, ...) pass through
    untouched; only driver/ORM errors are wrapped.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error while %s: %s", action, str(e), exc_info=True)
        raise DatabaseError(
            context={"action": action, "original_error": type(e).__name__, **context},
        )
