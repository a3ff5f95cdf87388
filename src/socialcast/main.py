"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from socialcast import __version__
from socialcast.api.deps import get_workspace
from socialcast.api.routes import connections, health, posts
from socialcast.config import settings
from socialcast.errors import BackendError
from socialcast.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("application_starting", version=__version__, backend=settings.backend_provider)

    # Startup: load linked accounts
    try:
        await get_workspace().oauth.refresh()
    except BackendError as e:
        logger.error("accounts_load_failed", error=e.message)
        # Don't raise - the dashboard can still refresh later

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="SocialCast",
    description="Multi-platform account linking and publish orchestration",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router)
app.include_router(connections.callback_router)
app.include_router(connections.router, prefix="/api/v1")
app.include_router(posts.router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint redirect to docs."""
    return {
        "name": "SocialCast",
        "version": __version__,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "socialcast.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
