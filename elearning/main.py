"""
Application entry point.
Run with:  uvicorn elearning.main:app --reload

⚠️  DEVELOPMENT NOTE:
    A default admin user is seeded on startup when SEED_ADMIN is true
    (see elearning/db/seeder.py). Disable it before deploying to production.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from elearning.core.logging_config import configure_logging
from elearning.core.config import Settings, settings
from elearning.core.exceptions import register_exception_handlers
from elearning.api.router import build_api_router
from elearning.db.database import init_db
from elearning.db.seeder import seed_admin

configure_logging(settings)


def create_app(config: Settings = settings) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    logger = logging.getLogger(__name__)
    logger.info("Starting FastAPI application setup")
    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description=(
            "Backend API for an e-learning platform: accounts, courses "
            "and enrollments."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Errors ──────────────────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(build_api_router(config.API_PREFIX))

    @app.get("/", include_in_schema=False)
    def root() -> str:
        return "Welcome to the E-Learning Platform API!"

    # ── Startup / shutdown events ───────────────────────────────────────────
    @app.on_event("startup")
    def on_startup() -> None:
        """Initialize the database and development seed data."""
        logger.info("Initializing database and seed data")
        init_db()
        seed_admin(config)

    return app


app = create_app()
