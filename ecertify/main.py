"""eCertify Ledger API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One Ledger created on startup via lifespan, held on app.state.ledger

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Three error handler layers: LedgerError (domain), RequestValidationError
      (Pydantic), Exception (catch-all); internal details never leak
    - Single-process uvicorn via run(): each Ledger lives in one process's memory
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ecertify.core.errors import LedgerError, ErrorSeverity
from ecertify.infrastructure.clock import SystemClock
from ecertify.infrastructure.observability import setup_logging
from ecertify.config import get_settings
from ecertify.services.ledger import Ledger
from ecertify.api.routes import (
    access, certificates, events, health, linkage, profiles,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if getattr(app.state, "ledger", None) is None:
        app.state.ledger = Ledger(clock=SystemClock())
    logger.info("eCertify ledger API started")
    yield
    logger.info("eCertify ledger API shutting down")


app = FastAPI(
    title="eCertify Ledger API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(profiles.router)
app.include_router(linkage.router)
app.include_router(certificates.router)
app.include_router(access.router)
app.include_router(events.router)


# ─── GLOBAL ERROR HANDLERS ──────────────────────────────────────

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Handle every ledger rejection with its specific code.

    Facade rejections carry context.operation and are already logged there;
    only errors raised in the HTTP shell are logged here.
    """
    if exc.context.operation is None:
        logger.info(
            f"LedgerError on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "actor": exc.context.actor},
        )
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError,
):
    """Handle Pydantic validation errors with structured response."""
    logger.warning(
        f"Validation error on {request.url.path}: {exc.errors()}",
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        },
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all: never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def run() -> None:
    """Console entry point: serve the app on settings.host:settings.port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, workers=1)
