"""Password hashing and access tokens."""

import base64
import hashlib
import hmac
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from calorie_tracker.domain.errors import AuthenticationError

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000
_JWT_ALGORITHM = "HS256"

_logger = logging.getLogger(__name__)


def hash_password(password: str, iterations: int = _PBKDF2_ITERATIONS) -> str:
    """Hash a password as ``pbkdf2_sha256$iterations$salt$digest``."""
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(
        _PBKDF2_ALG, password.encode("utf-8"), salt, iterations
    )
    return (
        f"pbkdf2_{_PBKDF2_ALG}${iterations}$"
        f"{_b64encode(salt)}${_b64encode(digest)}"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Return true when ``password`` matches the stored hash."""
    parts = password_hash.split("$", 3)
    if len(parts) != 4 or not parts[0].startswith("pbkdf2_"):  # noqa: PLR2004
        return False
    scheme, raw_iterations, salt_b64, digest_b64 = parts
    algorithm = scheme.split("_", 1)[1]
    try:
        salt = _b64decode(salt_b64)
        expected = _b64decode(digest_b64)
        actual = hashlib.pbkdf2_hmac(
            algorithm, password.encode("utf-8"), salt, int(raw_iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(actual, expected)


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + padding).encode("ascii"))


@dataclass
class TokenService:
    """Issues and verifies HS256 bearer tokens."""

    secret: str
    expires_days: int = 7

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Return a signed token for the user."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.expires_days),
        }
        return jwt.encode(payload, self.secret, algorithm=_JWT_ALGORITHM)

    def verify(self, token: str) -> UUID:
        """Return the user id encoded in a valid token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[_JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            _logger.info("Rejected invalid token: %s", exc)
            raise AuthenticationError("Invalid token") from exc
        try:
            return UUID(str(payload.get("sub")))
        except ValueError as exc:
            raise AuthenticationError("Invalid token") from exc
