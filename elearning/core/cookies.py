"""Refresh-token cookie policy."""
from fastapi import Response

from elearning.core.config import Settings


def set_refresh_cookie(response: Response, token: str, config: Settings) -> None:
    """Attach the refresh token as an HTTP-only cookie scoped to the refresh route."""
    response.set_cookie(
        key=config.REFRESH_COOKIE_NAME,
        value=token,
        max_age=config.refresh_cookie_max_age,
        path=config.REFRESH_COOKIE_PATH,
        httponly=True,
        secure=config.REFRESH_COOKIE_SECURE,
        samesite="lax",
    )


def clear_refresh_cookie(response: Response, config: Settings) -> None:
    """Expire the refresh cookie; safe to call when no cookie was set."""
    response.delete_cookie(
        key=config.REFRESH_COOKIE_NAME,
        path=config.REFRESH_COOKIE_PATH,
        httponly=True,
        secure=config.REFRESH_COOKIE_SECURE,
        samesite="lax",
    )
