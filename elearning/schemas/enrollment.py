"""
Pydantic schemas for course enrollment.
"""
from datetime import datetime
from typing import Optional

from elearning.schemas.common import APIModel
from elearning.schemas.course import CourseView


class EnrollRequest(APIModel):
    course_id: Optional[int] = None


class EnrollmentView(APIModel):
    id: int
    user_id: int
    course_id: int
    created_at: datetime
    course: Optional[CourseView] = None


class EnrollmentResponse(APIModel):
    message: str
    enrollment: EnrollmentView


class EnrollmentList(APIModel):
    user_courses: list[EnrollmentView]
