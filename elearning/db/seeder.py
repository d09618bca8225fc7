"""
Database seeder – creates a default admin account on first startup.

⚠️  FOR DEVELOPMENT ONLY.
    Set SEED_ADMIN=false (or change ADMIN_PASSWORD) before deploying.
    Course writes are ADMIN-only, so a fresh database needs at least one admin.
"""
import logging

from elearning.core.config import Settings
from elearning.core.security import PasswordHasher
from elearning.db.database import get_db
from elearning.models.user import UserRole
from elearning.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def seed_admin(config: Settings) -> None:
    """
    Insert the default admin user if it does not already exist.
    Safe to call on every startup – it is a no-op when the user is present.
    """
    if not config.SEED_ADMIN:
        logger.info("Seeder: admin seeding disabled")
        return

    with get_db() as conn:
        repo = UserRepository(conn)
        if repo.get_by_email(config.ADMIN_EMAIL):
            logger.info("Seeder: admin '%s' already exists – skipping.", config.ADMIN_EMAIL)
            return

        hasher = PasswordHasher.from_settings(config)
        repo.create(
            name=config.ADMIN_NAME,
            email=config.ADMIN_EMAIL,
            hashed_password=hasher.hash(config.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
        logger.info("Seeder: created default admin user '%s'.", config.ADMIN_EMAIL)
