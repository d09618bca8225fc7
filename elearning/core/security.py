"""
Security utilities: password hashing and JWT creation/verification.

Both helpers are built from a ``Settings`` instance handed in by the caller,
so business code never reads secrets from module state.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
import logging

import bcrypt
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JOSEError

from elearning.core.config import Settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    @classmethod
    def from_settings(cls, config: Settings) -> "PasswordHasher":
        return cls(rounds=config.BCRYPT_ROUNDS)

    def hash(self, plain_password: str) -> str:
        """Return the bcrypt hash of *plain_password*."""
        logger.trace("Hashing user password")
        pw_bytes = plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Return True if *plain_password* matches *hashed_password*."""
        logger.trace("Verifying password hash")
        pw_bytes = plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed_password.encode("utf-8"))
        except (ValueError, TypeError):
            logger.warning("Stored password hash is malformed")
            return False


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
    RESET = "reset"


@dataclass(frozen=True)
class TokenClaims:
    """Verified content of a token."""

    user_id: int
    kind: TokenKind
    expires_at: datetime


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired, forged or of the wrong kind."""


class TokenService:
    """Issues and verifies signed, time-limited tokens carrying a user id."""

    def __init__(self, config: Settings) -> None:
        self._secret = config.SECRET_KEY
        self._algorithm = config.ALGORITHM
        self._lifetimes = {
            TokenKind.ACCESS: timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
            TokenKind.REFRESH: timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
            TokenKind.RESET: timedelta(minutes=config.RESET_TOKEN_EXPIRE_MINUTES),
        }

    def issue(self, user_id: int, kind: TokenKind) -> str:
        """Build and sign a token of *kind* for *user_id*."""
        now = datetime.now(tz=timezone.utc)
        payload: dict[str, Any] = {
            "id": user_id,
            "type": kind.value,
            "iat": now,
            "exp": now + self._lifetimes[kind],
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.info("Issued %s token for user id=%s", kind.value, user_id)
        return token

    def issue_access(self, user_id: int) -> str:
        return self.issue(user_id, TokenKind.ACCESS)

    def issue_refresh(self, user_id: int) -> str:
        return self.issue(user_id, TokenKind.REFRESH)

    def issue_reset(self, user_id: int) -> str:
        return self.issue(user_id, TokenKind.RESET)

    def verify(self, token: str, kind: TokenKind) -> TokenClaims:
        """
        Decode *token* and check it is a live token of *kind*.

        Raises:
            InvalidTokenError: for any signature, format, expiry or kind problem.
        """
        logger.trace("Verifying %s token", kind.value)
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except JOSEError as exc:
            raise InvalidTokenError("Token could not be decoded") from exc

        if payload.get("type") != kind.value:
            raise InvalidTokenError(
                f"Expected a {kind.value} token, got {payload.get('type')!r}"
            )
        user_id = payload.get("id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Token does not name a user")
        expires = payload.get("exp")
        if not isinstance(expires, (int, float)) or isinstance(expires, bool):
            raise InvalidTokenError("Token has no expiry")

        return TokenClaims(
            user_id=user_id,
            kind=kind,
            expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
        )
