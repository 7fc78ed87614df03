"""
auth — Authentication and authorization.

Provides:
  • Password hashing (bcrypt)
  • Signed bearer token creation & verification
  • ``require_user`` FastAPI dependency (the auth gate)
  • ``ensure_owner`` ownership check for update/delete
"""

from postboard.auth.dependencies import AuthenticatedUser, require_user
from postboard.auth.ownership import ensure_owner
from postboard.auth.passwords import PasswordHasher
from postboard.auth.tokens import TokenService

__all__ = [
    "AuthenticatedUser",
    "PasswordHasher",
    "TokenService",
    "ensure_owner",
    "require_user",
]
