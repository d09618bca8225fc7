"""
Pydantic schemas for User request/response validation.

Request fields are all optional here: presence and format checks run in the
first-match validators so clients receive a single, ordered message.
"""
from datetime import datetime
from typing import Optional

from elearning.models.user import UserRole
from elearning.schemas.common import APIModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class RegisterRequest(APIModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(APIModel):
    """Profile update; absent or empty fields keep their current value."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    profile_picture: Optional[str] = None
    role: Optional[str] = None


class ForgotPasswordRequest(APIModel):
    email: Optional[str] = None


class ResetPasswordRequest(APIModel):
    password: Optional[str] = None
    confirm_password: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserView(APIModel):
    """Public projection of a user; never carries the password hash or reset token."""

    id: int
    name: str
    email: str
    role: UserRole
    profile_picture: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserResponse(APIModel):
    message: str
    user: UserView
