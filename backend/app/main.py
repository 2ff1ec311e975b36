"""
Product API: FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       owning its own seeded ProductStore.
Who:   Called by uvicorn (uvicorn app.main:app, or the product-api script).

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                      FastAPI App                          │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌────────────┐ ┌───────────┐ ┌────────────────┐          │
    │  │  Req ID    │→│  Logging  │→│ Authentication │          │
    │  └────────────┘ └───────────┘ └────────────────┘          │
    │                                                           │
    │  Routes:                                                  │
    │  ┌──────┐ ┌────────────────────────────────────────────┐  │
    │  │ GET /│ │ /api/products (list/search/stats/CRUD)     │  │
    │  └──────┘ └────────────────────────────────────────────┘  │
    │                                                           │
    │  Exception Handlers:                                      │
    │  ┌─────────────────────────────────────────────────────┐  │
    │  │ ProductAPIError→kind │ query errors→400 │ other→500 │  │
    │  └─────────────────────────────────────────────────────┘  │
    │                                                           │
    │  State: app.state.store (ProductStore, seeded)            │
    └───────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    ProductAPIError,
    ValidationError,
    error_response,
)
from app.middleware.auth import AuthenticationMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, current_request_id
from app.routes import products, root
from app.store import ProductStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] product_api.access: GET /api/products 200 1.2ms [a1b2c3d4] from 127.0.0.1
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Our access logger replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate critical configuration (logged, not fatal)
        3. Log store size and listen address
    Shutdown:
        The in-memory store is discarded with the process.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Product API starting up...")

    try:
        app_settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info("Product store seeded with %d products", len(app.state.store))
    logger.info("Server is running on http://%s:%d", app_settings.host, app_settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Product API shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ProductAPIError         → status from its ErrorKind
        RequestValidationError  → 400 (bad page/limit or other parameters)
        HTTPException           → framework status (unknown route, bad method)
        Exception (fallback)    → 500 with a generic message

    Every body has the {"message": ...} envelope. Internal details are logged
    server-side only.
    """

    @app.exception_handler(ProductAPIError)
    async def handle_product_api_error(request: Request, exc: ProductAPIError):
        rid = current_request_id()
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.kind.value, exc.message)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Query or path parameters failed FastAPI's own validation."""
        fields = []
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "path", "body")]
            field = loc[0] if loc else "request"
            if field not in fields:
                fields.append(field)
        return error_response(
            ValidationError(
                message=f"Invalid request parameters: {', '.join(fields)}",
                fields=fields,
            )
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Routing errors raised by the framework, e.g. 404 for unknown paths."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side ONLY (never in response).
        """
        rid = current_request_id()
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"message": INTERNAL_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level singleton
        store: Product store to serve; defaults to a freshly seeded store

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    if app_settings is None:
        app_settings = settings

    app = FastAPI(
        title="Product API",
        description="In-memory product catalogue with bearer-token authentication.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store if store is not None else ProductStore.seeded()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → Authentication → route
    app.add_middleware(AuthenticationMiddleware, api_key=app_settings.api_key)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(products.router)

    return app


def run() -> None:
    """Serve the application with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


if __name__ == "__main__":
    run()
