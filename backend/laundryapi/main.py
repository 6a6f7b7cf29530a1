"""
Laundry API Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error rendering,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (uvicorn laundryapi.main:app, or the `laundryapi`
       console script which calls run()).
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────────┐   │
    │  │ Req ID   │→│ Logging  │→│  GZip    │→│   CORS     │   │
    │  └──────────┘ └──────────┘ └──────────┘ └────────────┘   │
    │                                                          │
    │  Routes ({prefix} = API_PREFIX, default /api/v1):        │
    │  ┌────────────┐ ┌───────────────┐ ┌──────────────────┐   │
    │  │ auth       │ │ profile/users │ │ products         │   │
    │  ├────────────┤ ├───────────────┤ ├──────────────────┤   │
    │  │ customers  │ │ transactions  │ │ GET /health      │   │
    │  └────────────┘ └───────────────┘ └──────────────────┘   │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ LaundryError→own status │ body errors→400 │ 404    │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Report default secrets (logged, not fatal)
    3. Create missing tables
    4. Seed the owner account into an empty users table

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from laundryapi import __version__
from laundryapi.config import settings
from laundryapi.database import async_session_factory, create_schema, dispose_engine
from laundryapi.exceptions import AuthError, LaundryError, StoreError
from laundryapi.middleware.logging import RequestLoggingMiddleware
from laundryapi.middleware.request_id import RequestIDMiddleware, request_id_var
from laundryapi.routes import auth, customers, health, products, transactions, users
from laundryapi.services.user_service import user_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    One root handler on stdout with a consistent line format.
    When:    Called once at the start of the lifespan, before anything logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    # Third-party libraries log every request/statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    Code before yield runs on startup, code after yield on shutdown.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Laundry API Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Reported, not fatal: a local install runs on the defaults
        logger.error("Configuration error: %s", str(e))

    await create_schema()
    logger.info("Store ready: %s", settings.database_path)

    async with async_session_factory() as session:
        async with session.begin():
            if await user_service.ensure_owner(session):
                logger.warning(
                    "Owner account '%s' created from OWNER_* settings; change its password",
                    settings.owner_username,
                )

    logger.info("Server ready at http://%s:%d%s", settings.backend_host, settings.backend_port, settings.api_prefix)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Laundry API Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy (most specific class wins):
        StoreError              → 500 {error: <store message>}, logged with context
        AuthError               → 401/403, rejected access logged
        LaundryError (base)     → the exception's own status and body
        RequestValidationError  → 400 {error: "Invalid request body"}
        HTTPException 404/405   → 404 {error: "The resource not found"}
        Exception (fallback)    → 500 {error: "An unexpected error occurred"}

    Context dicts are logged, never returned.
    """

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] Access denied on %s %s: %s",
            rid,
            request.method,
            request.url.path,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(LaundryError)
    async def handle_laundry_error(request: Request, exc: LaundryError):
        rid = request_id_var.get("")
        logger.info("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Missing, empty or mistyped body fields and path parameters."""
        rid = request_id_var.get("")
        logger.info("[%s] Invalid request body at %s", rid, [error["loc"] for error in exc.errors()])
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # An unsupported method on a known path is reported like an unknown path
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "The resource not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the traceback is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Laundry API",
        description=(
            "Back office for a laundry shop: staff accounts with owner/admin/user "
            "roles, the product price list, customers, and recorded sales."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(customers.router)
    app.include_router(transactions.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


def run() -> None:
    """Console entry point: serve the app on BACKEND_HOST:BACKEND_PORT."""
    uvicorn.run(
        "laundryapi.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
