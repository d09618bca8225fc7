"""
Repository layer for User persistence.
All SQL for the `users` table lives here.
"""
import sqlite3
from typing import Optional
from datetime import datetime, timezone
import logging

from elearning.models.user import User, UserRole
from elearning.core.logging_config import log_db_timing

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = frozenset(
    {"name", "email", "hashed_password", "role", "profile_picture", "reset_token"}
)


class UserRepository:
    """Data access layer for user records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing UserRepository")
        self._conn = conn

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return a user by id or None if missing."""
        logger.trace("Fetching user by id=%s", user_id)
        row = self._conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        return User.from_row(row) if row else None

    @log_db_timing
    def get_by_email(self, email: str) -> Optional[User]:
        """Return a user by email or None if missing."""
        logger.trace("Fetching user by email=%s", email)
        row = self._conn.execute(
            "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()
        return User.from_row(row) if row else None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def create(
        self,
        *,
        name: str,
        email: str,
        hashed_password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Insert a new user row and return the created user."""
        logger.info("Creating user record email=%s", email)
        now = datetime.now(tz=timezone.utc).isoformat()
        cursor = self._conn.execute(
            """
            INSERT INTO users (name, email, hashed_password, role, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (name, email, hashed_password, role.value, now, now),
        )
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    @log_db_timing
    def update(self, user_id: int, **fields) -> Optional[User]:
        """Update user fields and return the updated row."""
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown user columns: {', '.join(sorted(unknown))}")
        if not fields:
            logger.trace("No user fields to update id=%s", user_id)
            return self.get_by_id(user_id)

        logger.info("Updating user record id=%s fields=%s", user_id, sorted(fields))
        if isinstance(fields.get("role"), UserRole):
            fields["role"] = fields["role"].value
        fields["updated_at"] = datetime.now(tz=timezone.utc).isoformat()
        set_clause = ", ".join(f"{col} = ?" for col in fields)
        values = list(fields.values()) + [user_id]
        self._conn.execute(
            f"UPDATE users SET {set_clause} WHERE id = ?", values
        )
        return self.get_by_id(user_id)

    @log_db_timing
    def delete(self, user_id: int) -> bool:
        """Remove the user row; enrollments go with it (ON DELETE CASCADE)."""
        logger.info("Deleting user id=%s", user_id)
        cursor = self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        logger.info("User delete affected %s rows", cursor.rowcount)
        return cursor.rowcount > 0
