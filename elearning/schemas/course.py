"""
Pydantic schemas for Course request/response validation.
"""
from datetime import datetime
from typing import Optional

from elearning.models.course import CourseLevel
from elearning.schemas.common import APIModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CourseCreate(APIModel):
    """Payload for creating courses; rules are applied by validate_course."""

    title: Optional[str] = None
    category: Optional[str] = None
    level: Optional[str] = None
    description: Optional[str] = None
    instructor: Optional[str] = None
    duration: Optional[int] = None
    price: Optional[float] = None


class CourseUpdate(CourseCreate):
    """Payload for updating courses; absent or empty fields are left unchanged."""


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class CourseView(APIModel):
    id: int
    title: str
    category: str
    level: CourseLevel
    description: str
    instructor: str
    duration: int
    price: float
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class CourseResponse(APIModel):
    message: str
    course: CourseView


class CourseDetail(APIModel):
    course: CourseView


class CourseList(APIModel):
    courses: list[CourseView]
