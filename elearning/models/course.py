"""
Domain model representing a Course row from the DB.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class CourseLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"


@dataclass
class Course:
    id: int
    title: str
    category: str
    level: CourseLevel
    description: str
    instructor: str
    duration: int
    price: float
    created_by: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row) -> "Course":
        """Build a Course from a sqlite3.Row object."""
        logger.trace("Hydrating Course from database row")
        return cls(
            id=row["id"],
            title=row["title"],
            category=row["category"],
            level=CourseLevel(row["level"]),
            description=row["description"],
            instructor=row["instructor"],
            duration=row["duration"],
            price=row["price"],
            created_by=row["created_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
