"""
Central API router – registers all endpoint sub-routers.
"""
from fastapi import APIRouter
import logging

from elearning.api.endpoints import auth, courses, users

logger = logging.getLogger(__name__)


def build_api_router(prefix: str) -> APIRouter:
    """Return the API router mounted under *prefix* (``/api`` by default)."""
    logger.info("Registering API routers under %s", prefix)
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(auth.router)
    api_router.include_router(users.router)
    api_router.include_router(courses.router)
    return api_router
