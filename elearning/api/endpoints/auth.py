"""
Authentication endpoints:
  POST /auth/register       – Create a USER account
  POST /auth/login          – Returns an access token; sets the refresh-token cookie
  POST /auth/logout         – Clears the refresh-token cookie
  POST /auth/refresh_token  – Exchange a refresh token for a new access token
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
import logging

from elearning.core.config import Settings, get_settings
from elearning.core.cookies import clear_refresh_cookie, set_refresh_cookie
from elearning.core.dependencies import (
    db_dependency,
    get_notifier,
    get_password_hasher,
    get_token_service,
)
from elearning.core.security import PasswordHasher, TokenService
from elearning.schemas.common import MessageResponse
from elearning.schemas.token import (
    AccessToken,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
)
from elearning.schemas.user import RegisterRequest, UserResponse, UserView
from elearning.services.auth_service import AuthService
from elearning.services.notification_service import Notifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_service(
    conn=Depends(db_dependency),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    notifier: Notifier = Depends(get_notifier),
) -> AuthService:
    return AuthService(conn, hasher, tokens, notifier)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(data: RegisterRequest, service: AuthService = Depends(_auth_service)):
    """
    Create a USER account and send a welcome email.

    Password rules: 6-20 characters with a lowercase letter, an uppercase
    letter, a digit and one of `!@#$%^&*`; no other characters.
    """
    logger.info("Registration requested for email=%s", data.email)
    user = service.register(data)
    return UserResponse(message="User created successfully", user=UserView.model_validate(user))


@router.post("/login", response_model=LoginResponse, summary="Login with email and password")
def login(
    data: LoginRequest,
    response: Response,
    service: AuthService = Depends(_auth_service),
    config: Settings = Depends(get_settings),
):
    """
    Returns an **access token** in the body and sets an HTTP-only
    **refresh token** cookie scoped to `/api/auth/refresh_token`.
    """
    logger.info("Login requested for email=%s", data.email)
    result = service.login(data)
    set_refresh_cookie(response, result.refresh_token, config)
    return LoginResponse(
        message="Login successful",
        access_token=result.access_token,
        user=UserView.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse, summary="Clear the refresh-token cookie")
def logout(response: Response, config: Settings = Depends(get_settings)):
    """Idempotent: succeeds whether or not a cookie was present."""
    logger.info("Logout requested")
    clear_refresh_cookie(response, config)
    return MessageResponse(message="Logged out")


@router.post(
    "/refresh_token",
    response_model=AccessToken,
    summary="Obtain a new access token using a valid refresh token",
)
def refresh_token(
    request: Request,
    data: Optional[RefreshTokenRequest] = None,
    service: AuthService = Depends(_auth_service),
    config: Settings = Depends(get_settings),
):
    """
    Reads the refresh token from the `token` body field, falling back to the
    refresh-token cookie.
    """
    logger.info("Refreshing access token")
    token = (data.token if data else None) or request.cookies.get(config.REFRESH_COOKIE_NAME)
    return AccessToken(access_token=service.refresh(token))
