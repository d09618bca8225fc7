"""
Course catalogue service.
Reads are open to any authenticated user; writes are gated to admins at the
endpoint layer.
"""
import sqlite3
from typing import Optional
import logging

from elearning.core.exceptions import NotFoundError, ValidationError
from elearning.core.validators import is_missing, validate_course
from elearning.models.course import Course, CourseLevel
from elearning.models.user import User
from elearning.repositories.course_repository import CourseRepository
from elearning.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)

COURSE_FIELDS = (
    "title", "category", "level", "description", "instructor", "duration", "price"
)


class CourseService:
    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing CourseService")
        self._repo = CourseRepository(conn)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_course(self, course_id: int) -> Course:
        logger.info("Fetching course id=%s", course_id)
        course = self._repo.get_by_id(course_id)
        if not course:
            logger.warning("Course id=%s not found", course_id)
            raise NotFoundError("Course not found")
        return course

    def list_courses(
        self,
        title: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> list[Course]:
        logger.info(
            "Listing courses title=%s category=%s level=%s page=%s limit=%s",
            title, category, level, page, limit,
        )
        return self._repo.list_filtered(
            title=title,
            category=category,
            level=level,
            limit=limit,
            offset=(page - 1) * limit,
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_course(self, data: CourseCreate, created_by: User) -> Course:
        logger.info("Creating course %s", data.title)
        errors = validate_course(data.model_dump())
        if errors:
            logger.warning("Course rejected: %s", errors[0])
            raise ValidationError(", ".join(errors))

        course = self._repo.create(
            title=data.title,
            category=data.category,
            level=CourseLevel(data.level),
            description=data.description,
            instructor=data.instructor,
            duration=data.duration,
            price=data.price,
            created_by=created_by.id,
        )
        logger.info("Course created id=%s", course.id)
        return course

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_course(self, course_id: int, data: CourseUpdate) -> Course:
        """Apply the non-empty fields of *data*, then validate the merged course."""
        logger.info("Updating course id=%s", course_id)
        course = self.get_course(course_id)

        submitted = data.model_dump()
        changes = {
            field: submitted[field]
            for field in COURSE_FIELDS
            if not is_missing(submitted[field])
        }
        merged = {
            "title": course.title,
            "category": course.category,
            "level": course.level.value,
            "description": course.description,
            "instructor": course.instructor,
            "duration": course.duration,
            "price": course.price,
            **changes,
        }
        errors = validate_course(merged)
        if errors:
            logger.warning("Course update rejected id=%s: %s", course_id, errors[0])
            raise ValidationError(", ".join(errors))

        if "level" in changes:
            changes["level"] = CourseLevel(changes["level"])
        updated = self._repo.update(course_id, **changes)
        logger.info("Course updated id=%s fields=%s", course_id, sorted(changes))
        return updated  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_course(self, course_id: int) -> None:
        logger.info("Deleting course id=%s", course_id)
        self.get_course(course_id)
        if not self._repo.delete(course_id):
            raise NotFoundError("Course not found")
        logger.info("Course deleted id=%s", course_id)
