"""
Repository layer for Enrollment persistence.
All SQL for the `enrollments` table lives here.
"""
import sqlite3
from typing import Optional
from datetime import datetime, timezone
import logging

from elearning.models.course import Course
from elearning.models.enrollment import Enrollment
from elearning.core.logging_config import log_db_timing

logger = logging.getLogger(__name__)


class EnrollmentRepository:
    """Data access layer for user/course enrollments."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing EnrollmentRepository")
        self._conn = conn

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        row = self._conn.execute(
            "SELECT * FROM enrollments WHERE id = ?", (enrollment_id,)
        ).fetchone()
        return Enrollment.from_row(row) if row else None

    @log_db_timing
    def get(self, user_id: int, course_id: int) -> Optional[Enrollment]:
        """Return the enrollment for this user/course pair, if any."""
        logger.trace("Fetching enrollment user_id=%s course_id=%s", user_id, course_id)
        row = self._conn.execute(
            "SELECT * FROM enrollments WHERE user_id = ? AND course_id = ?",
            (user_id, course_id),
        ).fetchone()
        return Enrollment.from_row(row) if row else None

    @log_db_timing
    def list_for_user(self, user_id: int) -> list[Enrollment]:
        """Return the user's enrollments with their courses attached."""
        logger.trace("Listing enrollments for user id=%s", user_id)
        enrollments = [
            Enrollment.from_row(r)
            for r in self._conn.execute(
                "SELECT * FROM enrollments WHERE user_id = ? ORDER BY id", (user_id,)
            ).fetchall()
        ]
        if not enrollments:
            return []

        course_ids = [e.course_id for e in enrollments]
        placeholders = ", ".join("?" for _ in course_ids)
        courses = {
            row["id"]: Course.from_row(row)
            for row in self._conn.execute(
                f"SELECT * FROM courses WHERE id IN ({placeholders})", course_ids
            ).fetchall()
        }
        for enrollment in enrollments:
            enrollment.course = courses.get(enrollment.course_id)
        return enrollments

    @log_db_timing
    def count_for_user(self, user_id: int) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM enrollments WHERE user_id = ?", (user_id,)
        ).fetchone()[0]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def create(self, user_id: int, course_id: int) -> Enrollment:
        logger.info("Creating enrollment user_id=%s course_id=%s", user_id, course_id)
        now = datetime.now(tz=timezone.utc).isoformat()
        cursor = self._conn.execute(
            "INSERT INTO enrollments (user_id, course_id, created_at) VALUES (?, ?, ?)",
            (user_id, course_id, now),
        )
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]
