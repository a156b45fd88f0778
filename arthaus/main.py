import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arthaus.core.config import settings
from arthaus.core.errors import register_exception_handlers
from arthaus.core.logging import setup_logging
from arthaus.domains.art_piece.router import router as art_piece_router
from arthaus.domains.gallery.router import router as gallery_router
from arthaus.shared.database.connection import get_db, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Create database tables
    init_db()
    logger.info("Starting %s (%s)", settings.app_name, settings.node_env)
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )
    register_exception_handlers(application)

    # Include routers
    application.include_router(gallery_router, prefix="/api/v1")
    application.include_router(art_piece_router, prefix="/api/v1")

    @application.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Welcome to Arthaus"}

    @application.get("/health")
    def health_check(db: Session = Depends(get_db)) -> dict[str, str]:
        try:
            # Test database connection
            db.execute(text("SELECT 1"))
            return {
                "status": "healthy",
                "environment": settings.node_env,
                "database": "connected",
            }
        except SQLAlchemyError as e:
            logger.warning("Health check failed: %s", e)
            return {
                "status": "unhealthy",
                "environment": settings.node_env,
                "database": "disconnected",
                "error": str(e),
            }

    return application


app = create_app()
