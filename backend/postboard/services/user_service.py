"""
Postboard Backend — User Service (registration and login)
===========================================================

What:  Registration and login against the users table.
Why:   Keeps credential rules (required fields, password length, uniqueness,
       enumeration-safe login errors) out of the route handlers.
How:   bcrypt runs in Starlette's threadpool so a slow hash does not block
       the event loop; tokens come from the injected TokenService.

Registration Flow:
    validate fields → hash password → INSERT → flush
    IntegrityError on flush (duplicate username/email) → ConflictError

Login Flow:
    validate fields → SELECT by username → bcrypt verify → issue token
    Unknown username and wrong password raise the SAME AuthenticationError.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from postboard.auth.passwords import PasswordHasher
from postboard.auth.tokens import TokenService
from postboard.exceptions import AuthenticationError, ConflictError, ValidationError
from postboard.models.user import User
from postboard.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from postboard.services.base import database_errors, require_fields

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid credentials"


class UserService:
    """Stateless; the hasher and token service are passed per call."""

    async def register(
        self,
        db: AsyncSession,
        payload: RegisterRequest,
        hasher: PasswordHasher,
    ) -> RegisterResponse:
        """
        Create a new user.

        Raises:
            ValidationError: missing field or password too short
            ConflictError: username or email already registered
            DatabaseError: any other persistence failure
        """
        require_fields(
            "All fields are required",
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        password_hash = await run_in_threadpool(hasher.hash, payload.password)

        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=password_hash,
        )
        with database_errors("registering user"):
            try:
                db.add(user)
                await db.flush()
            except IntegrityError:
                await db.rollback()
                logger.info("Registration rejected: username or email already taken")
                raise ConflictError("Username or password already in use")

        logger.info("Registered user %s (%s)", user.username, user.id)
        return RegisterResponse(
            message="User successfully created",
            user=UserPublic(username=user.username, email=user.email),
        )

    async def login(
        self,
        db: AsyncSession,
        payload: LoginRequest,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> LoginResponse:
        """Check credentials and issue a bearer token."""
        require_fields(
            "Username and password required",
            username=payload.username,
            password=payload.password,
        )

        with database_errors("looking up user"):
            result = await db.execute(select(User).where(User.username == payload.username))
            user = result.scalar_one_or_none()

        if user is None:
            # Burn the same bcrypt cost as the wrong-password path
            await run_in_threadpool(hasher.verify, payload.password, hasher.dummy_hash)
            raise AuthenticationError(INVALID_CREDENTIALS)

        matches = await run_in_threadpool(hasher.verify, payload.password, user.password_hash)
        if not matches:
            logger.info("Failed login for user %s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = tokens.issue(str(user.id))
        logger.info("Login: %s (%s)", user.username, user.id)
        return LoginResponse(message="Login successful", token=token)


user_service = UserService()
