"""
Enrollment service: enrolling the current user in a course and listing
their enrollments.
"""
import sqlite3
from typing import Optional
import logging

from elearning.core.exceptions import ConflictError, NotFoundError, ValidationError
from elearning.models.enrollment import Enrollment
from elearning.models.user import User
from elearning.repositories.course_repository import CourseRepository
from elearning.repositories.enrollment_repository import EnrollmentRepository
from elearning.repositories.user_repository import UserRepository
from elearning.services.notification_service import Notifier

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(self, conn: sqlite3.Connection, notifier: Notifier) -> None:
        logger.trace("Initializing EnrollmentService")
        self._conn = conn
        self._users = UserRepository(conn)
        self._courses = CourseRepository(conn)
        self._enrollments = EnrollmentRepository(conn)
        self._notifier = notifier

    def enroll(self, current_user: User, course_id: Optional[int]) -> Enrollment:
        if course_id is None:
            raise ValidationError("Course ID is required")

        user = self._users.get_by_id(current_user.id)
        if user is None:
            raise NotFoundError("User not found")

        course = self._courses.get_by_id(course_id)
        if course is None:
            logger.warning("Enrollment for unknown course id=%s", course_id)
            raise NotFoundError("Course not found")

        if self._enrollments.get(user.id, course.id):
            logger.warning("User id=%s already enrolled in course id=%s", user.id, course.id)
            raise ConflictError("User is already enrolled in the course")

        try:
            enrollment = self._enrollments.create(user.id, course.id)
        except sqlite3.IntegrityError:
            raise ConflictError("User is already enrolled in the course")

        enrollment.course = course
        logger.info("User id=%s enrolled in course id=%s", user.id, course.id)
        # Commit first; the write lock must not span the email provider call.
        self._conn.commit()
        self._notifier.enrolled(user, course)
        return enrollment

    def list_enrollments(self, current_user: User) -> list[Enrollment]:
        logger.info("Listing enrollments for user id=%s", current_user.id)
        return self._enrollments.list_for_user(current_user.id)
