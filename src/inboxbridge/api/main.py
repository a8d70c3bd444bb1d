"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from inboxbridge.infrastructure import get_firestore_client, get_settings
from inboxbridge.infrastructure.log_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    yield

    logger.info("Shutting down...")
    get_firestore_client().disconnect()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Gmail push notifications to Firestore email records",
        lifespan=lifespan,
    )

    from inboxbridge.api.routes import router
    from inboxbridge.infrastructure.http.gmail_push import router as gmail_router

    app.include_router(router)
    app.include_router(gmail_router)

    return app


# Create app instance
app = create_app()
