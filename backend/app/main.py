"""FastAPI application entry point for Brand Pulse.

Influencer / brand intelligence backend: pairs an influencer with a brand,
runs the AI analysis pipeline (or its synthetic fallback), and serves the
tracker and trend-brief surfaces of the dashboard.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.config import settings
from app.orchestrator.pipeline import API_VERSION
from app.orchestrator.scheduler import start_scheduler, stop_scheduler
from app.api import analyze, briefs, tracker

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(name)-25s | %(levelname)-7s | %(message)s",
)
logger = logging.getLogger("brand_pulse")

_started_at = time.monotonic()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ──
    logger.info("Brand Pulse starting up (env=%s)...", settings.app_env)
    if settings.active_api_key:
        logger.info("AI provider %s enabled (model=%s)", settings.ai_provider, settings.active_model)
    else:
        logger.info(
            "No API key for AI provider %s, analyses will use synthetic results",
            settings.ai_provider,
        )

    # One-shot jobs (brief generation); non-fatal if it fails
    try:
        start_scheduler()
    except Exception as e:
        logger.warning("Scheduler failed to start: %s", e)

    yield

    # ── Shutdown ──
    stop_scheduler()
    logger.info("Brand Pulse shut down cleanly")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Brand Pulse",
    description=(
        "Influencer brand-intelligence API. Scores sentiment and brand "
        "alignment of an influencer's content with an LLM, falling back to "
        "synthetic analysis when no provider is available."
    ),
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error envelopes
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
            "status": 400,
        },
    )


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail, "status": exc.status_code},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
app.include_router(analyze.router, prefix="/api")
app.include_router(tracker.router, prefix="/api")
app.include_router(briefs.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Brand Pulse",
        "tagline": "influencer brand intelligence",
        "version": API_VERSION,
        "docs": "/docs",
    }


@app.get("/api/health")
async def health():
    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 1),
        "environment": settings.app_env,
        "version": API_VERSION,
        "services": {
            "ai": {
                "provider": settings.ai_provider,
                "status": "configured" if settings.active_api_key else "not-configured",
                "model": settings.active_model,
            }
        },
    }
