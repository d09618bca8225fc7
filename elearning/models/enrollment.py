"""
Domain model representing an Enrollment row, optionally joined with its course.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging

from elearning.models.course import Course

logger = logging.getLogger(__name__)


@dataclass
class Enrollment:
    id: int
    user_id: int
    course_id: int
    created_at: datetime
    course: Optional[Course] = None

    @classmethod
    def from_row(cls, row) -> "Enrollment":
        """Build an Enrollment from a sqlite3.Row object."""
        logger.trace("Hydrating Enrollment from database row")
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            course_id=row["course_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
