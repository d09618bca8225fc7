"""
Authentication service: orchestrates registration, login and token refresh.
"""
import sqlite3
from dataclasses import dataclass
from typing import Optional
import logging

from elearning.core.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from elearning.core.security import (
    InvalidTokenError,
    PasswordHasher,
    TokenKind,
    TokenService,
)
from elearning.core.validators import validate_login, validate_register
from elearning.models.user import User
from elearning.repositories.user_repository import UserRepository
from elearning.schemas.token import LoginRequest
from elearning.schemas.user import RegisterRequest
from elearning.services.notification_service import Notifier

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


class AuthService:
    def __init__(
        self,
        conn: sqlite3.Connection,
        hasher: PasswordHasher,
        tokens: TokenService,
        notifier: Notifier,
    ) -> None:
        logger.trace("Initializing AuthService")
        self._conn = conn
        self._user_repo = UserRepository(conn)
        self._hasher = hasher
        self._tokens = tokens
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, data: RegisterRequest) -> User:
        """Create a USER account; the welcome email is best-effort."""
        errors = validate_register(data.model_dump())
        if errors:
            logger.warning("Registration rejected: %s", errors[0])
            raise ValidationError(", ".join(errors))

        if self._user_repo.get_by_email(data.email):
            logger.warning("Duplicate email registration attempt: %s", data.email)
            raise ConflictError("User already exists")

        try:
            user = self._user_repo.create(
                name=data.name,
                email=data.email,
                hashed_password=self._hasher.hash(data.password),
            )
        except sqlite3.IntegrityError:
            logger.warning("Concurrent registration for email=%s", data.email)
            raise ConflictError("User already exists")

        logger.info("User registered id=%s", user.id)
        # Commit first; the write lock must not span the email provider call.
        self._conn.commit()
        self._notifier.welcome(user)
        return user

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def login(self, data: LoginRequest) -> LoginResult:
        """Check credentials and issue an access + refresh token pair."""
        errors = validate_login(data.model_dump())
        if errors:
            raise ValidationError(", ".join(errors))

        logger.info("Authenticating user '%s'", data.email)
        user = self._user_repo.get_by_email(data.email)
        if user is None:
            logger.warning("Login for unknown email '%s'", data.email)
            raise NotFoundError("User not found")

        if not self._hasher.verify(data.password, user.hashed_password):
            logger.warning("Invalid password for user id=%s", user.id)
            raise ValidationError("Invalid credentials")

        logger.info("Login successful for user id=%s", user.id)
        return LoginResult(
            user=user,
            access_token=self._tokens.issue_access(user.id),
            refresh_token=self._tokens.issue_refresh(user.id),
        )

    # ------------------------------------------------------------------
    # Token refresh
    # ------------------------------------------------------------------

    def refresh(self, refresh_token: Optional[str]) -> str:
        """Exchange a valid refresh token for a new access token."""
        if not refresh_token:
            logger.warning("Refresh requested without a token")
            raise UnauthorizedError("Invalid token")

        try:
            claims = self._tokens.verify(refresh_token, TokenKind.REFRESH)
        except InvalidTokenError as exc:
            logger.warning("Refresh token rejected: %s", exc)
            raise UnauthorizedError("Invalid token")

        user = self._user_repo.get_by_id(claims.user_id)
        if user is None:
            logger.warning("Refresh token names missing user id=%s", claims.user_id)
            raise NotFoundError("User not found")

        logger.info("Refresh token validated for user id=%s", user.id)
        return self._tokens.issue_access(user.id)
