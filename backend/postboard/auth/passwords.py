"""
Password hashing and verification.

Uses bcrypt: every hash gets a fresh random salt, and the output string
embeds algorithm, cost and salt, so verification needs nothing but the
stored hash.
"""

from __future__ import annotations

from functools import cached_property

import bcrypt

# bcrypt only looks at the first 72 bytes of its input; newer releases raise
# instead of truncating, so the cut happens here.
MAX_PASSWORD_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    """bcrypt hasher with a fixed work factor."""

    def __init__(self, rounds: int = 10) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError(f"Invalid bcrypt work factor {rounds}; must be between 4 and 31")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a random per-call salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_secret_bytes(password), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_secret_bytes(password), password_hash.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

    @cached_property
    def dummy_hash(self) -> str:
        """
        A hash no password is checked against for real. Login verifies
        against it when the username is unknown, so both failure paths cost
        one bcrypt round trip.
        """
        return self.hash("postboard-dummy-password")
