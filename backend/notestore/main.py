"""
NoteStore - FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) wires settings, the NoteService, middleware,
       exception handlers and routers into one app.
Who:   Called by notestore.cli, by tests, and by
       `uvicorn --factory notestore.main:create_app` (settings from env).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌───────────────────────┐ │
    │  │ /notes, /write       │ │ /, /UploadForm.html   │ │
    │  └──────────────────────┘ └───────────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Exists→400 │ NotFound→404   │   │
    │  │ FileStorage→500 │ Exception→500              │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the cache directory if it is missing
    3. Log the bound address and resolved cache directory

    Shutdown:
    1. Log shutdown
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from notestore import __version__
from notestore.config import Settings
from notestore.exceptions import (
    FileStorageError,
    NoteAlreadyExistsError,
    NoteStoreError,
    NotFoundError,
    ValidationError,
)
from notestore.middleware.logging import RequestLoggingMiddleware
from notestore.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from notestore.routes import notes, pages
from notestore.services.note_service import NoteService

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] notestore.main: message
    Called once during app startup, before anything else logs.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, cache directory, address banner.
    The cache directory exists before the first request is accepted.
    """
    settings: Settings = app.state.settings
    note_service: NoteService = app.state.note_service

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("NoteStore %s starting up...", __version__)

    cache_dir = await note_service.ensure_cache_directory()

    logger.info("Server is running at %s", settings.base_url)
    logger.info("Cache directory: %s", cache_dir)
    logger.info("API docs: %s/docs", settings.base_url)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NoteStore shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _text_error(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(
        message,
        status_code=status_code,
        headers={REQUEST_ID_HEADER: request_id_var.get("")},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and plain-text bodies.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        NoteAlreadyExistsError  → 400 Bad Request ("Note already exists")
        NotFoundError           → 404 Not Found ("Note not found")
        FileStorageError        → 500 Internal Server Error
        NoteStoreError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Response bodies never include paths or OS errors; those go to the log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return _text_error(400, exc.message)

    @app.exception_handler(NoteAlreadyExistsError)
    async def handle_already_exists(request: Request, exc: NoteAlreadyExistsError):
        return _text_error(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _text_error(404, exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _text_error(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(NoteStoreError)
    async def handle_note_store_error(request: Request, exc: NoteStoreError):
        rid = request_id_var.get("")
        logger.error("[%s] NoteStore error: %s | Context: %s", rid, exc.message, exc.context)
        return _text_error(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all. The stack trace is logged, never returned."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _text_error(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Server configuration. When omitted, it is read from the
                  NOTES_* environment variables.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Notes API",
        description="API for managing notes stored as text files in a cache directory.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.note_service = NoteService(settings.cache_path)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID runs first, then Logging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(pages.router)

    return app
