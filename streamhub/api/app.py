"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamhub.controller import StreamHubController
from streamhub.core.config import Settings, get_settings
from streamhub.core.logging import setup_logging
from streamhub.models import PageLocation

from .routers import auth_router, streams_router, view_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    controller: StreamHubController | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    One app serves one viewer: it owns exactly one ``StreamHubController``.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Handle startup and shutdown"""
        app.state.start_time = time.time()
        app.state.controller = controller or StreamHubController(settings)

        # Startup
        logger.info("Starting StreamHub")
        logger.info(f"Environment: {settings.environment}")
        page = PageLocation(f"http://{settings.host}:{settings.port}/")
        await app.state.controller.start(page)

        yield

        # Shutdown
        logger.info("Shutting down StreamHub")
        try:
            await app.state.controller.shutdown()
        except Exception as e:
            logger.exception(f"Error during shutdown: {e}")

    # Setup logging first
    setup_logging(settings)

    app = FastAPI(
        title="StreamHub",
        description="Multi-stream viewer state API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # The viewer page is served from the same host
    origin = f"http://{settings.host}:{settings.port}"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(auth_router.router)
    app.include_router(streams_router.router)
    app.include_router(view_router.router)

    @app.get("/health")
    async def health():
        """Liveness check"""
        return {
            "status": "healthy",
            "uptime_seconds": int(time.time() - app.state.start_time),
        }

    logger.info("FastAPI application configured")

    return app
