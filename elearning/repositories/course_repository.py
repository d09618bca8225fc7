"""
Repository layer for Course persistence.
All SQL for the `courses` table lives here.
"""
import sqlite3
from typing import Optional
from datetime import datetime, timezone
import logging

from elearning.models.course import Course, CourseLevel
from elearning.core.logging_config import log_db_timing

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = frozenset(
    {"title", "category", "level", "description", "instructor", "duration", "price"}
)


class CourseRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing CourseRepository")
        self._conn = conn

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, course_id: int) -> Optional[Course]:
        logger.trace("Fetching course id=%s", course_id)
        row = self._conn.execute(
            "SELECT * FROM courses WHERE id = ?", (course_id,)
        ).fetchone()
        return Course.from_row(row) if row else None

    @log_db_timing
    def list_filtered(
        self,
        title: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Course]:
        """Return one page of courses matching the optional filters."""
        clauses: list[str] = []
        params: list = []
        if title:
            clauses.append("title LIKE ?")
            params.append(f"%{title}%")
        if category:
            clauses.append("category = ?")
            params.append(category)
        if level:
            clauses.append("level = ?")
            params.append(level)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        logger.trace("Listing courses where=%r limit=%s offset=%s", where, limit, offset)
        rows = self._conn.execute(
            f"SELECT * FROM courses {where} ORDER BY id LIMIT ? OFFSET ?",
            (*params, limit, offset),
        ).fetchall()
        return [Course.from_row(r) for r in rows]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def create(
        self,
        *,
        title: str,
        category: str,
        level: CourseLevel,
        description: str,
        instructor: str,
        duration: int,
        price: float,
        created_by: int,
    ) -> Course:
        logger.info("Creating course record title=%s", title)
        now = datetime.now(tz=timezone.utc).isoformat()
        cursor = self._conn.execute(
            """
            INSERT INTO courses (title, category, level, description, instructor,
                                 duration, price, created_by, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                title,
                category,
                level.value,
                description,
                instructor,
                duration,
                price,
                created_by,
                now,
                now,
            ),
        )
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    @log_db_timing
    def update(self, course_id: int, **fields) -> Optional[Course]:
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown course columns: {', '.join(sorted(unknown))}")
        if not fields:
            logger.trace("No course fields to update id=%s", course_id)
            return self.get_by_id(course_id)

        logger.info("Updating course record id=%s", course_id)
        if isinstance(fields.get("level"), CourseLevel):
            fields["level"] = fields["level"].value
        fields["updated_at"] = datetime.now(tz=timezone.utc).isoformat()
        set_clause = ", ".join(f"{col} = ?" for col in fields)
        values = list(fields.values()) + [course_id]
        self._conn.execute(
            f"UPDATE courses SET {set_clause} WHERE id = ?", values
        )
        return self.get_by_id(course_id)

    @log_db_timing
    def delete(self, course_id: int) -> bool:
        """Delete a course; its enrollments are removed by ON DELETE CASCADE."""
        logger.info("Deleting course record id=%s", course_id)
        cursor = self._conn.execute(
            "DELETE FROM courses WHERE id = ?", (course_id,)
        )
        logger.info("Course delete affected %s rows", cursor.rowcount)
        return cursor.rowcount > 0
