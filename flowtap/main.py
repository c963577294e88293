"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowtap.application.services import AppContext
from flowtap.config import get_settings
from flowtap.infrastructure.dependencies import build_app_context
from flowtap.infrastructure.logging.log_config import setup_logging
from flowtap.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, release clients on shutdown."""
    setup_logging()
    context: AppContext = app.state.context
    logger.info("Serving %d entity stores", len(context.registry))

    yield

    # Shutdown
    context.bridge.detach_all()
    if context.broadcaster is not None:
        await context.broadcaster.shutdown()
    await context.transport.aclose()


def create_app(context: AppContext | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.context = context or build_app_context(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "flowtap.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
