"""
Keyword Scout API — FastAPI application.

Launch:
    uvicorn keyword_scout.api.app:app --host 127.0.0.1 --port 8000

Or:
    python run.py serve
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from keyword_scout import __version__
from keyword_scout.api.models import HealthResponse
from keyword_scout.api.routes import keywords, suggestions
from keyword_scout.config import get_settings
from keyword_scout.logging_config import configure_logging

_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    logger.info("Keyword Scout API starting up...")
    logger.info(f"   Remote suggestions: {'enabled' if settings.remote_enabled else 'disabled (offline catalogue)'}")
    logger.info(f"   Google Trends:      {'enabled' if settings.trends_enabled else 'disabled (synthetic trends)'}")
    logger.info(f"   Mode:               {'lightweight' if settings.lightweight else 'standard'}")

    yield

    logger.info("Keyword Scout API shutting down...")


app = FastAPI(
    title="Keyword Scout API",
    description="Seed keyword expansion with mock search volume, competition, "
                "CPC, trend and intent metrics.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handling ---

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "details": str(exc) or type(exc).__name__,
        },
    )


# --- Routes ---

app.include_router(suggestions.router)
app.include_router(keywords.router)


@app.get("/health", response_model=HealthResponse, tags=["general"])
async def health_check():
    """Service health check."""
    settings = get_settings()
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 1),
        remote_suggestions=settings.remote_enabled,
        trends_enabled=settings.trends_enabled,
        lightweight=settings.lightweight,
    )
