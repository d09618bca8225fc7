"""
User account service: profile update, password reset and account deletion.

Business rules enforced here:
- Empty or absent fields on a profile update keep their stored value.
- Only admins may change a role.
- A reset token is valid only for the account it was issued to, and only
  while it is the token stored on that account.
- Writes are committed before the notification email goes out.
"""
import sqlite3
import logging

from elearning.core.exceptions import (
    ConflictError,
    InternalError,
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
from elearning.core.validators import (
    is_missing,
    validate_password,
    validate_reset_password,
)
from elearning.models.user import User, UserRole
from elearning.repositories.user_repository import UserRepository
from elearning.schemas.user import ResetPasswordRequest, UserUpdate
from elearning.services.media_service import (
    PROFILE_PICTURE_FOLDER,
    PROFILE_PICTURE_SIZE,
    ImageUploader,
    ImageUploadError,
)
from elearning.services.notification_service import Notifier

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        conn: sqlite3.Connection,
        hasher: PasswordHasher,
        tokens: TokenService,
        notifier: Notifier,
        uploader: ImageUploader,
    ) -> None:
        logger.trace("Initializing UserService")
        self._conn = conn
        self._repo = UserRepository(conn)
        self._hasher = hasher
        self._tokens = tokens
        self._notifier = notifier
        self._uploader = uploader

    def _get_user(self, user_id: int) -> User:
        user = self._repo.get_by_id(user_id)
        if user is None:
            logger.warning("User id=%s not found", user_id)
            raise NotFoundError("User not found")
        return user

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def update_profile(self, current_user: User, data: UserUpdate) -> User:
        logger.info("Updating profile for user id=%s", current_user.id)
        user = self._get_user(current_user.id)
        updates: dict = {}

        if not is_missing(data.name):
            updates["name"] = data.name

        if not is_missing(data.email) and data.email != user.email:
            existing = self._repo.get_by_email(data.email)
            if existing and existing.id != user.id:
                logger.warning("Email update collides with user id=%s", existing.id)
                raise ConflictError("User already exists")
            updates["email"] = data.email

        if not is_missing(data.password):
            errors = validate_password({"password": data.password})
            if errors:
                raise ValidationError(", ".join(errors))
            updates["hashed_password"] = self._hasher.hash(data.password)

        if not is_missing(data.role):
            try:
                role = UserRole(data.role)
            except ValueError:
                raise ValidationError("Role must be USER or ADMIN")
            if role != user.role:
                if user.role != UserRole.ADMIN:
                    logger.warning("User id=%s attempted to change own role", user.id)
                    raise UnauthorizedError("Access Denied")
                updates["role"] = role

        if not is_missing(data.profile_picture):
            try:
                updates["profile_picture"] = self._uploader.upload(
                    data.profile_picture,
                    folder=PROFILE_PICTURE_FOLDER,
                    width=PROFILE_PICTURE_SIZE,
                    height=PROFILE_PICTURE_SIZE,
                )
            except ImageUploadError:
                logger.error(
                    "Profile picture upload failed for user id=%s", user.id, exc_info=True
                )
                raise InternalError()

        try:
            updated = self._repo.update(user.id, **updates)
        except sqlite3.IntegrityError:
            raise ConflictError("User already exists")
        logger.info("Profile updated id=%s fields=%s", user.id, sorted(updates))
        self._conn.commit()
        self._notifier.profile_updated(updated)  # type: ignore[arg-type]
        return updated  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    def forgot_password(self, email: str) -> None:
        """Issue a reset token, store it on the account and email the link."""
        if is_missing(email):
            raise ValidationError("Email is required")

        user = self._repo.get_by_email(email)
        if user is None:
            logger.warning("Password reset requested for unknown email=%s", email)
            raise NotFoundError("User not found")

        token = self._tokens.issue_reset(user.id)
        self._repo.update(user.id, reset_token=token)
        logger.info("Reset token stored for user id=%s", user.id)
        self._conn.commit()
        self._notifier.password_reset_link(user, token)

    def reset_password(
        self, current_user: User, token: str, data: ResetPasswordRequest
    ) -> User:
        """Set a new password using the reset token stored on the caller's account."""
        if not token or current_user.reset_token != token:
            logger.warning("Reset token mismatch for user id=%s", current_user.id)
            raise UnauthorizedError("Invalid token")
        try:
            claims = self._tokens.verify(token, TokenKind.RESET)
        except InvalidTokenError as exc:
            logger.warning("Reset token rejected for user id=%s: %s", current_user.id, exc)
            raise UnauthorizedError("Invalid token")
        if claims.user_id != current_user.id:
            raise UnauthorizedError("Invalid token")

        errors = validate_reset_password(data.model_dump())
        if errors:
            raise ValidationError(", ".join(errors))

        user = self._get_user(current_user.id)
        if self._hasher.verify(data.password, user.hashed_password):
            raise ValidationError(
                "New password must be different from the current password"
            )

        updated = self._repo.update(
            user.id,
            hashed_password=self._hasher.hash(data.password),
            reset_token=None,
        )
        logger.info("Password reset for user id=%s", user.id)
        self._conn.commit()
        self._notifier.password_reset_done(updated)  # type: ignore[arg-type]
        return updated  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_account(self, current_user: User) -> None:
        logger.info("Deleting account id=%s", current_user.id)
        user = self._get_user(current_user.id)
        if not self._repo.delete(user.id):
            raise NotFoundError("User not found")
        logger.info("Account deleted id=%s", user.id)
        self._conn.commit()
        self._notifier.account_deleted(user.email)
