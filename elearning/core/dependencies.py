"""
FastAPI dependency injection helpers for collaborators, authentication and
authorisation.

Clients send the access token as the raw value of the ``Authorization``
header (no ``Bearer`` scheme).
"""
from typing import Generator, Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
import logging

from elearning.core.config import Settings, get_settings
from elearning.core.exceptions import UnauthorizedError
from elearning.core.security import (
    InvalidTokenError,
    PasswordHasher,
    TokenKind,
    TokenService,
)
from elearning.db.database import get_db
from elearning.models.user import User, UserRole
from elearning.repositories.user_repository import UserRepository
from elearning.services.media_service import CloudinaryUploader, ImageUploader
from elearning.services.notification_service import Mailer, Notifier, ResendMailer

logger = logging.getLogger(__name__)

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


# ---------------------------------------------------------------------------
# DB dependency
# ---------------------------------------------------------------------------

def db_dependency() -> Generator:
    """Yield a database connection for the duration of a request."""
    logger.trace("Creating database dependency connection")
    with get_db() as conn:
        yield conn


# ---------------------------------------------------------------------------
# Collaborators built from settings
# ---------------------------------------------------------------------------

def get_password_hasher(config: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher.from_settings(config)


def get_token_service(config: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(config)


def get_mailer(config: Settings = Depends(get_settings)) -> Mailer:
    return ResendMailer(config)


def get_notifier(
    mailer: Mailer = Depends(get_mailer),
    config: Settings = Depends(get_settings),
) -> Notifier:
    return Notifier(mailer, config)


def get_image_uploader(config: Settings = Depends(get_settings)) -> ImageUploader:
    return CloudinaryUploader(config)


# ---------------------------------------------------------------------------
# Auth dependencies
# ---------------------------------------------------------------------------

def get_current_user(
    token: Optional[str] = Depends(authorization_header),
    tokens: TokenService = Depends(get_token_service),
    conn=Depends(db_dependency),
) -> User:
    """
    Resolve the access token in the Authorization header to a stored user.
    Rejects with 400 when the token is absent or invalid, or the user is gone.
    """
    if not token:
        logger.warning("Request without Authorization header")
        raise UnauthorizedError("Invalid Authentication")
    try:
        claims = tokens.verify(token, TokenKind.ACCESS)
    except InvalidTokenError as exc:
        logger.warning("Access token rejected: %s", exc)
        raise UnauthorizedError("Invalid Authentication")

    user = UserRepository(conn).get_by_id(claims.user_id)
    if user is None:
        logger.warning("Access token names missing user id=%s", claims.user_id)
        raise UnauthorizedError("User does not exist")
    logger.info("Authenticated user id=%s", user.id)
    return user


# ---------------------------------------------------------------------------
# Role-based access control
# ---------------------------------------------------------------------------

def require_role(role: UserRole):
    """
    Factory that returns a dependency which enforces that the current user
    holds *role*.

    Usage::
        @router.post("/admin-only")
        def admin_only(user: User = Depends(require_role(UserRole.ADMIN))):
            ...
    """
    def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            logger.warning(
                "User id=%s lacks required role %s", current_user.id, role.value
            )
            raise UnauthorizedError("Access Denied")
        logger.info("User id=%s authorized with role %s", current_user.id, role.value)
        return current_user
    return _check


require_admin = require_role(UserRole.ADMIN)
