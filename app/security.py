"""
Password hashing and access tokens.

Passwords are hashed with bcrypt through passlib; tokens are HS256 JWTs
carrying the user id as ``sub``. Both are built from the ``Settings`` handed
to ``AppContext``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from bson import ObjectId
from passlib.context import CryptContext

from app.config import Settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger("gutcheck.security")

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class PasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "PasswordHasher":
        return cls(config.password_hash_rounds)

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a random salt."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            # unrecognised or corrupt hash in the store
            logger.warning("Stored password hash could not be parsed")
            return False


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(config.jwt_secret, config.jwt_algorithm, config.jwt_expire_days)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Sign a token for ``user_id`` that expires after the configured lifetime."""
        issued_at = now or datetime.now(tz=timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Return the user id carried by ``token``.

        Raises:
            UnauthorizedError: bad signature, malformed, expired, or no usable subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
        except jwt.PyJWTError as exc:
            logger.info("Rejected invalid token: %s", exc)
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
        return user_id
