"""
Postboard Backend — User Request/Response Schemas
===================================================

Request fields are Optional on purpose: a missing field must produce the
service's 400 message ("All fields are required"), not FastAPI's generic 422.
"""

from typing import Optional

from postboard.schemas.common import ApiModel


class RegisterRequest(ApiModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(ApiModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserPublic(ApiModel):
    """What registration echoes back: never the id or the hash."""

    username: str
    email: str


class RegisterResponse(ApiModel):
    message: str
    user: UserPublic


class LoginResponse(ApiModel):
    message: str
    token: str
