"""
Domain model (plain Python dataclass) representing a User row from the DB.
This is the internal representation used across service and repository layers;
it carries the password hash and must never be returned to clients directly.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: int
    name: str
    email: str
    hashed_password: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
    profile_picture: Optional[str] = None
    reset_token: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "User":
        """Build a User from a sqlite3.Row object."""
        logger.trace("Hydrating User from database row")
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            hashed_password=row["hashed_password"],
            role=UserRole(row["role"]),
            profile_picture=row["profile_picture"],
            reset_token=row["reset_token"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
