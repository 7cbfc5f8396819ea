"""
FastAPI application entry point for the Sun-Sathi estimator API.

Loads settings at startup, configures structured JSON logging, registers
the routers, and maps the estimator's error taxonomy onto HTTP responses:

- ConfigurationError -> 500 (missing API key; raised before any AI call)
- FileTooLargeError -> 413, other LocalValidationError -> 400
- AnalysisError -> 502 with the flow's generic message

Run with ``uvicorn sunsathi.api.main:app``.

CHANGELOG:
- 2026-10-14: Register solar, appliances, efficiency routers (STORY-010)
- 2026-10-14: Map error taxonomy to HTTP status codes (STORY-009)
- 2026-10-13: Register consumption router (STORY-004)
- 2026-10-12: Initial creation (STORY-001)
"""

import json
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sunsathi.api.appliances import router as appliances_router
from sunsathi.api.consumption import router as consumption_router
from sunsathi.api.efficiency import router as efficiency_router
from sunsathi.api.health import router as health_router
from sunsathi.api.solar import router as solar_router
from sunsathi.config import SunSathiSettings
from sunsathi.errors import (
    AnalysisError,
    ConfigurationError,
    FileTooLargeError,
    LocalValidationError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


class _JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structured JSON logging on the ``sunsathi`` logger.

    The handler is attached to the package logger rather than the root so
    that uvicorn's own access logging is left alone.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    package_logger = logging.getLogger("sunsathi")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def log_config_summary(settings: SunSathiSettings) -> None:
    """Log a config summary at startup, excluding the API key."""
    logger.info(
        "Sun-Sathi API starting with config: model_id=%s, gemini_base_url=%s, "
        "max_video_bytes=%d, request_timeout_s=%s, api_key_configured=%s",
        settings.model_id,
        settings.gemini_base_url,
        settings.max_video_bytes,
        settings.request_timeout_s,
        settings.has_api_key,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load settings and log readiness.

    A missing API key is not fatal at startup: the Money Saver calculator
    works without it, and the AI routes answer with a configuration error.
    """
    configure_logging()
    settings = SunSathiSettings()
    app.state.settings = settings
    log_config_summary(settings)

    if not settings.has_api_key:
        logger.warning("API_KEY is not set; AI analysis routes will be refused")

    logger.info("Sun-Sathi API ready")
    yield
    logger.info("Sun-Sathi API shutting down")


app = FastAPI(
    title="Sun-Sathi Estimator API",
    description="Rooftop solar, appliance consumption and efficiency estimates for Indian homes.",
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(health_router)
app.include_router(consumption_router)
app.include_router(appliances_router)
app.include_router(solar_router)
app.include_router(efficiency_router)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """Missing credential: fatal for the AI flows, surfaced immediately."""
    logger.error("Configuration error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(LocalValidationError)
async def local_validation_error_handler(
    request: Request, exc: LocalValidationError
) -> JSONResponse:
    """Input rejected locally; no AI call was made."""
    status_code = 413 if isinstance(exc, FileTooLargeError) else 400
    logger.info("Rejected upload on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """AI call or decoding failed; reply with the generic flow message."""
    logger.warning(
        "Analysis failed on %s (%s): %s",
        request.url.path,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.get("/")
async def root() -> dict:
    """Root health check endpoint.

    Returns:
        dict: JSON object with application status.
    """
    return {"status": "ok"}
