"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flashgen_core import __version__

from app.db.session import init_db
from app.errors import register_exception_handlers
from app.routers import batches, health
from app.settings import settings

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database on startup."""
    if settings.create_tables_on_startup:
        await init_db()
    if not settings.openrouter_api_key:
        logger.warning("openrouter_api_key_missing")
    logger.info("api_started", version=__version__)
    yield


app = FastAPI(
    title="flashgen API",
    description="API for generating and reviewing AI flashcards",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware - allow all origins in dev, restrict in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.cors_allow_all else settings.cors_origins,
    allow_credentials=not settings.cors_allow_all,  # credentials require specific origins
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(batches.router, prefix="/api/v1", tags=["batches"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
