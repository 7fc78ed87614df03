"""
FastAPI dependencies for authentication.

``require_user`` is the auth gate for every mutating route: it reads the
``Authorization: Bearer <token>`` header, verifies the token and returns an
``AuthenticatedUser``. Service methods that mutate data take an
``AuthenticatedUser`` argument, so a handler cannot reach them without
passing through the gate first.

The token service and password hasher are built once by ``create_app`` and
kept on ``app.state``; the getters below hand them to route handlers.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request

from postboard.auth.passwords import PasswordHasher
from postboard.auth.tokens import TokenService
from postboard.exceptions import AuthenticationError, InvalidTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity of a caller whose bearer token has been verified."""

    user_id: uuid.UUID


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def extract_bearer_token(authorization: str) -> Optional[str]:
    """Second whitespace-separated segment of the header, or None."""
    parts = authorization.split()
    if len(parts) < 2:
        return None
    return parts[1]


async def require_user(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Verify the bearer token and return the authenticated user.

    Raises ``AuthenticationError`` (401) with "No token provided" when the
    header is absent, and "Invalid token" for anything that fails
    verification.
    """
    if not authorization:
        raise AuthenticationError("No token provided")

    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Invalid token", context={"reason": "missing token segment"})

    try:
        user_id = uuid.UUID(tokens.verify(token))
    except InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc.reason)
        raise AuthenticationError("Invalid token", context={"reason": exc.reason})
    except ValueError:
        raise AuthenticationError("Invalid token", context={"reason": "malformed userId"})

    request.state.user_id = str(user_id)
    return AuthenticatedUser(user_id=user_id)
