"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from lexbrief.api.routes import documents, health, summarize
from lexbrief.core.config import get_settings
from lexbrief.core.exceptions import (
    LexBriefError,
    generic_exception_handler,
    lexbrief_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name}")

    if settings.require_auth and not settings.jwt_secret:
        logger.warning("REQUIRE_AUTH is enabled but JWT_SECRET is not set")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="AI-powered legal document summarizer",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(LexBriefError, lexbrief_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register routers
    api_prefix = "/api"
    app.include_router(health.router, prefix=api_prefix)
    app.include_router(documents.router, prefix=api_prefix)
    app.include_router(summarize.router, prefix=api_prefix)

    @app.get("/")
    async def root():
        return {
            "service": settings.app_name,
            "version": "0.1.0",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lexbrief.main:app",
        host="0.0.0.0",
        port=3001,
        reload=True,
        reload_dirs=["lexbrief"],
    )
