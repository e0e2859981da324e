"""
Customer API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (customer_api.main:app) and by the test suite.

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
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ GET/POST/PUT /customers  │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ CustomerAPIError→status │ Body→400 │ *→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect the customer store unless one was injected (fatal on failure)
    Shutdown:
    1. Close the store if the lifespan opened it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from customer_api import __version__
from customer_api.config import settings
from customer_api.database import open_customer_store
from customer_api.exceptions import CustomerAPIError
from customer_api.middleware.logging import RequestLoggingMiddleware
from customer_api.middleware.request_id import RequestIDMiddleware, request_id_var
from customer_api.routes import customers, health
from customer_api.services.customer_store import CustomerStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's; pymongo logs every heartbeat at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store on startup and close it on shutdown.

    A store injected through create_app(store=...) is used as-is and left
    open; its owner is responsible for closing it. A StorageError from
    connecting propagates and aborts startup, which stops the process.
    """
    setup_logging()
    logger.info("Customer API %s starting up...", __version__)

    owned: Optional[CustomerStore] = None
    if getattr(app.state, "customer_store", None) is None:
        try:
            owned = await open_customer_store(settings)
        except CustomerAPIError as exc:
            logger.critical("Customer store unavailable: %s | %s", exc.message, exc.context)
            raise
        app.state.customer_store = owned

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("Customer API shutting down...")
    if owned is not None:
        await owned.close()
        app.state.customer_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        CustomerAPIError        → exc.status_code, {"error": exc.message}
        RequestValidationError  → 400 {"error": "Invalid customer payload"}
        StarletteHTTPException  → exc.status_code, {"error": exc.detail} (unknown path, 405)
        Exception (fallback)    → 500 {"error": "Internal server error"}

    Context and driver errors are logged server-side only.
    """

    @app.exception_handler(CustomerAPIError)
    async def handle_customer_api_error(request: Request, exc: CustomerAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body is not JSON or has wrong field types; nothing reached the store."""
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid customer payload"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Routing-level errors keep their status and headers (e.g. Allow on 405)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[CustomerStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Customer store to serve from. When omitted, the lifespan
               connects a MongoCustomerStore from settings on startup.
    """
    app = FastAPI(
        title="Customer API",
        description="CRUD operations over customer records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.customer_store = store

    # Middleware executes in REVERSE order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(customers.router)
    app.include_router(health.router)

    return app


# uvicorn expects `customer_api.main:app` to be importable
app = create_app()
