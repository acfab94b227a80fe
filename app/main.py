"""FastAPI app entry: config, logging, health, and error handling."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config.chunking.static import load_chunking_profiles
from app.config.logging import configure_logging, get_logger
from app.config.settings import get_settings
from app.controllers.routes.split import router as split_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: config, logging, and profile validation."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    # Bad profiles should fail startup, not the first request
    profiles = load_chunking_profiles()
    logger.info("Chunking profiles loaded", extra={"profiles": sorted(profiles)})
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Text Splitter",
    description="Split text into overlapping, size-bounded chunks for retrieval pipelines",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(split_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: do not leak stack traces or internal details."""
    logger.exception("Unhandled error", extra={"error": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )
