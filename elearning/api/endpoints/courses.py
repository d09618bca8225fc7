"""
Course endpoints (reads: any authenticated user; writes: ADMIN only):
  POST   /courses/create-course        – Create a course
  GET    /courses/get-courses          – List courses (filter + paginate)
  GET    /courses/get-course/{id}      – Get a course
  PUT    /courses/update-course/{id}   – Update a course
  DELETE /courses/delete-course/{id}   – Delete a course
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
import logging

from elearning.core.dependencies import db_dependency, get_current_user, require_admin
from elearning.models.user import User
from elearning.schemas.common import MessageResponse
from elearning.schemas.course import (
    CourseCreate,
    CourseDetail,
    CourseList,
    CourseResponse,
    CourseUpdate,
    CourseView,
)
from elearning.services.course_service import CourseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.post(
    "/create-course",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new course",
)
def create_course(
    data: CourseCreate,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    """
    All fields are required. `level` must be `BEGINNER` or `INTERMEDIATE`,
    `duration` at least 10 (minutes) and `price` at least 0.
    """
    logger.info("Creating course %s", data.title)
    course = CourseService(conn).create_course(data, created_by=current_user)
    return CourseResponse(
        message="Course created successfully", course=CourseView.model_validate(course)
    )


@router.get("/get-courses", response_model=CourseList, summary="List courses")
def list_courses(
    title: Optional[str] = Query(None, description="Substring match on title"),
    category: Optional[str] = Query(None, description="Exact category"),
    level: Optional[str] = Query(None, description="Exact level"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    conn=Depends(db_dependency),
    _: User = Depends(get_current_user),
):
    courses = CourseService(conn).list_courses(
        title=title, category=category, level=level, page=page, limit=limit
    )
    return CourseList(courses=[CourseView.model_validate(c) for c in courses])


@router.get("/get-course/{course_id}", response_model=CourseDetail, summary="Get a course")
def get_course(
    course_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(get_current_user),
):
    course = CourseService(conn).get_course(course_id)
    return CourseDetail(course=CourseView.model_validate(course))


@router.put(
    "/update-course/{course_id}",
    response_model=CourseResponse,
    summary="Update a course",
)
def update_course(
    course_id: int,
    data: CourseUpdate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    """Empty or absent fields keep their current value; the result must still be a valid course."""
    logger.info("Updating course id=%s", course_id)
    course = CourseService(conn).update_course(course_id, data)
    return CourseResponse(
        message="Course updated successfully", course=CourseView.model_validate(course)
    )


@router.delete(
    "/delete-course/{course_id}",
    response_model=MessageResponse,
    summary="Delete a course",
)
def delete_course(
    course_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Deleting course id=%s", course_id)
    CourseService(conn).delete_course(course_id)
    return MessageResponse(message="Course deleted successfully")
