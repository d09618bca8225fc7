"""Application configuration loaded via pydantic settings."""

from functools import lru_cache
from typing import List, Optional
import secrets

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Strongly-typed application settings with environment overrides."""

    # Application
    APP_NAME: str = "E-Learning Platform API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    RESET_TOKEN_EXPIRE_MINUTES: int = 15
    BCRYPT_ROUNDS: int = 10

    # Refresh-token cookie
    REFRESH_COOKIE_NAME: str = "refreshToken"
    REFRESH_COOKIE_PATH: str = "/api/auth/refresh_token"
    REFRESH_COOKIE_SECURE: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./elearning/elearning.db"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Public client used in password-reset links
    CLIENT_URL: str = "http://localhost:3000"

    # Transactional email (Resend)
    RESEND_API_KEY: Optional[str] = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    RESEND_FROM_EMAIL: str = "onboarding@resend.dev"
    # Sandbox recipient; when set every email goes here instead of the user
    RESEND_EMAIL: Optional[str] = None
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    # Image hosting (Cloudinary)
    CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    UPLOAD_TIMEOUT_SECONDS: float = 30.0

    # Development admin seed
    SEED_ADMIN: bool = True
    ADMIN_NAME: str = "Default Admin"
    ADMIN_EMAIL: str = "admin@elearning.local"
    ADMIN_PASSWORD: str = "Admin123!"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVELS: str = "TRACE,ERROR,WARNING,INFO"
    LOG_FILE_PATH: str = "./elearning/logs/app.log"

    class Config:
        """Configure environment file loading behavior."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def refresh_cookie_max_age(self) -> int:
        """Cookie lifetime in seconds, tied to the refresh token expiry."""
        return self.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance, built once."""
    return Settings()


settings = get_settings()
