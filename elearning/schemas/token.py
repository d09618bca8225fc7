"""
Pydantic schemas for login and token refresh.
"""
from typing import Optional

from elearning.schemas.common import APIModel
from elearning.schemas.user import UserView


class LoginRequest(APIModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(APIModel):
    """Body returned on login; the refresh token travels in a cookie."""

    message: str
    access_token: str
    user: UserView


class AccessToken(APIModel):
    access_token: str


class RefreshTokenRequest(APIModel):
    """Body for /auth/refresh_token; the cookie is used when ``token`` is absent."""

    token: Optional[str] = None
