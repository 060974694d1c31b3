"""
Bookmark Sync - API Main Application

FastAPI application exposing bookmark import and export.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from config import AppSettings, get_config
from . import __version__
from .db import init_database, close_database
from .deps import get_store
from .models import HealthResponse
from .paths import ensure_upload_dir
from .routes import import_router, export_router

# Configure logging
logging.basicConfig(
    level=AppSettings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Bookmark sync API starting...")

    upload_dir = ensure_upload_dir(get_config().uploads.upload_dir)
    logger.info(f"Uploads directory: {upload_dir}")

    # Initialize database
    await init_database()
    logger.info("Database connected")

    yield

    # Cleanup
    await close_database()
    logger.info("Bookmark sync API shutting down")


app = FastAPI(
    title="Bookmark Sync API",
    description="Import, organize and export browser bookmarks",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(import_router)
app.include_router(export_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(store=Depends(get_store)):
    """Health check endpoint."""
    try:
        async with store.connection() as conn:
            await conn.fetchval("SELECT 1")
        db_status = "connected"
    except Exception:
        db_status = "disconnected"

    return HealthResponse(
        status="healthy" if db_status == "connected" else "degraded",
        version=__version__,
        database=db_status,
    )


# Run with: uvicorn sync_api.main:app --host 0.0.0.0 --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
