"""
Application error taxonomy and the FastAPI handlers that render it.

Every error reaches the client as ``{"message": "..."}``. Authorization
failures deliberately use 400 rather than 401/403 to stay compatible with
existing clients.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A request field failed a validation rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """The referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(AppError):
    """Authentication or role check failed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Duplicate registration or enrollment."""

    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(AppError):
    """Unexpected failure; the detail stays in the server log."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid value for {location}: {first.get('msg', 'invalid')}"
    return first.get("msg", "Invalid request")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        message = INTERNAL_ERROR_MESSAGE
    else:
        logger.warning(
            "%s %s rejected (%s): %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"message": message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _first_validation_message(exc)
    logger.warning("%s %s malformed request: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"message": message}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to *app*."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
