"""
User endpoints (any authenticated user, acting on their own account):
  PUT    /users/update                  – Update name, email, password, picture or role
  POST   /users/forgot-password         – Email a password-reset link
  POST   /users/reset-password/{token}  – Set a new password with the emailed token
  DELETE /users/delete                  – Delete the current account
  POST   /users/enroll                  – Enroll in a course
  GET    /users/enrollments             – List the current user's enrollments
"""
from fastapi import APIRouter, Depends
import logging

from elearning.core.dependencies import (
    db_dependency,
    get_current_user,
    get_image_uploader,
    get_notifier,
    get_password_hasher,
    get_token_service,
)
from elearning.core.security import PasswordHasher, TokenService
from elearning.models.user import User
from elearning.schemas.common import MessageResponse
from elearning.schemas.enrollment import (
    EnrollmentList,
    EnrollmentResponse,
    EnrollmentView,
    EnrollRequest,
)
from elearning.schemas.user import (
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserResponse,
    UserUpdate,
    UserView,
)
from elearning.services.enrollment_service import EnrollmentService
from elearning.services.media_service import ImageUploader
from elearning.services.notification_service import Notifier
from elearning.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _user_service(
    conn=Depends(db_dependency),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    notifier: Notifier = Depends(get_notifier),
    uploader: ImageUploader = Depends(get_image_uploader),
) -> UserService:
    return UserService(conn, hasher, tokens, notifier, uploader)


def _enrollment_service(
    conn=Depends(db_dependency),
    notifier: Notifier = Depends(get_notifier),
) -> EnrollmentService:
    return EnrollmentService(conn, notifier)


@router.put("/update", response_model=UserResponse, summary="Update the current user's profile")
def update_profile(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(_user_service),
):
    """
    Empty or absent fields keep their current value. `profilePicture` may be
    an image URL or data URI; it is uploaded and the hosted URL stored.
    Only admins may change `role`.
    """
    logger.info("Profile update requested by user id=%s", current_user.id)
    user = service.update_profile(current_user, data)
    return UserResponse(message="User updated successfully", user=UserView.model_validate(user))


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Send a password-reset link",
)
def forgot_password(
    data: ForgotPasswordRequest,
    _: User = Depends(get_current_user),
    service: UserService = Depends(_user_service),
):
    logger.info("Password reset link requested for email=%s", data.email)
    service.forgot_password(data.email)
    return MessageResponse(message="Password reset link sent to your email")


@router.post(
    "/reset-password/{token}",
    response_model=UserResponse,
    summary="Reset the current user's password",
)
def reset_password(
    token: str,
    data: ResetPasswordRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(_user_service),
):
    """The path token must be the reset token most recently issued to the caller."""
    logger.info("Password reset submitted by user id=%s", current_user.id)
    user = service.reset_password(current_user, token, data)
    return UserResponse(message="Password reset successfully", user=UserView.model_validate(user))


@router.delete("/delete", response_model=MessageResponse, summary="Delete the current account")
def delete_account(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(_user_service),
):
    logger.info("Account deletion requested by user id=%s", current_user.id)
    service.delete_account(current_user)
    return MessageResponse(message="Account deleted successfully")


@router.post("/enroll", response_model=EnrollmentResponse, summary="Enroll in a course")
def enroll(
    data: EnrollRequest,
    current_user: User = Depends(get_current_user),
    service: EnrollmentService = Depends(_enrollment_service),
):
    logger.info("Enrollment requested by user id=%s course id=%s", current_user.id, data.course_id)
    enrollment = service.enroll(current_user, data.course_id)
    return EnrollmentResponse(
        message="User enrolled in course successfully",
        enrollment=EnrollmentView.model_validate(enrollment),
    )


@router.get("/enrollments", response_model=EnrollmentList, summary="List my enrollments")
def list_enrollments(
    current_user: User = Depends(get_current_user),
    service: EnrollmentService = Depends(_enrollment_service),
):
    enrollments = service.list_enrollments(current_user)
    return EnrollmentList(
        user_courses=[EnrollmentView.model_validate(e) for e in enrollments]
    )
