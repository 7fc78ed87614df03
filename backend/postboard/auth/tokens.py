"""
JWT-style token creation and verification.

Tokens use the compact JWT layout (``header.payload.signature``, each part
base64url without padding) signed with HMAC-SHA256. The payload carries
``userId``, ``iat`` and ``exp``. Nothing in the payload is trusted until the
signature has been checked.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict

from postboard.exceptions import InvalidTokenError

DEFAULT_EXPIRY_SECONDS = 24 * 60 * 60

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _json_segment(data: Dict[str, Any]) -> str:
    return _b64encode(json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8"))


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    ``clock`` returns the current time in seconds since the epoch; tests pass
    a fake clock to move past the expiry without sleeping.
    """

    def __init__(
        self,
        secret: str,
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if expiry_seconds <= 0:
            raise ValueError("Token expiry must be positive")
        self._secret = secret.encode("utf-8")
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenService(expiry_seconds={self.expiry_seconds})"

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, hashlib.sha256).digest()

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id`` that expires after ``expiry_seconds``."""
        now = int(self._clock())
        payload = {
            "userId": str(user_id),
            "iat": now,
            "exp": now + self.expiry_seconds,
        }
        signing_input = f"{_json_segment(_HEADER)}.{_json_segment(payload)}"
        signature = self._sign(signing_input.encode("ascii"))
        return f"{signing_input}.{_b64encode(signature)}"

    def verify(self, token: str) -> str:
        """
        Verify ``token`` and return the ``userId`` claim.

        Raises ``InvalidTokenError`` on a malformed token, unexpected
        algorithm, bad signature, missing claims, or an expired timestamp.
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError("missing token")

        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError("bad format")
        header_seg, payload_seg, signature_seg = parts

        try:
            signature = _b64decode(signature_seg)
        except (binascii.Error, ValueError):
            raise InvalidTokenError("bad encoding")

        expected = self._sign(f"{header_seg}.{payload_seg}".encode("ascii", errors="replace"))
        if not hmac.compare_digest(signature, expected):
            raise InvalidTokenError("bad signature")

        try:
            header = json.loads(_b64decode(header_seg))
            payload = json.loads(_b64decode(payload_seg))
        except (binascii.Error, ValueError):
            raise InvalidTokenError("bad encoding")

        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise InvalidTokenError("unsupported algorithm")
        if not isinstance(payload, dict):
            raise InvalidTokenError("bad payload")

        user_id = payload.get("userId")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("missing userId")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError("missing exp")
        if self._clock() >= exp:
            raise InvalidTokenError("token expired")

        return user_id
