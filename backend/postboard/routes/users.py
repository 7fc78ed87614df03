"""
Postboard Backend — Registration & Login Routes
=================================================

What:  POST /users (register) and POST /login (issue a bearer token).
Who:   Unauthenticated clients; these are the only ways to obtain a token.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.dependencies import get_password_hasher, get_token_service
from postboard.auth.passwords import PasswordHasher
from postboard.auth.tokens import TokenService
from postboard.database import get_db_session
from postboard.schemas.common import ErrorResponse
from postboard.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from postboard.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=RegisterResponse,
    responses={
        400: {"description": "Missing fields, short password, or taken username/email",
              "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegisterResponse:
    return await user_service.register(db=db, payload=payload, hasher=hasher)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing username or password", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Exchange username and password for a bearer token",
    description="The token is valid for 24 hours and cannot be revoked before it expires.",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    return await user_service.login(db=db, payload=payload, hasher=hasher, tokens=tokens)
