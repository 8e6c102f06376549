"""
Shoplist Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance that
       owns its own pair of in-memory collections.
Who:   Called by AppServer (shoplist.server), by uvicorn directly
       (uvicorn shoplist.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │  Req ID  │→│  Access Log     │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────┐ ┌────────────────┐ │
    │  │ /shopping-list │ │ /recipes │ │ / + assets     │ │
    │  └────────────────┘ └──────────┘ └────────────────┘ │
    │                                                     │
    │  State: app.state.shopping_list, app.state.recipes  │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ HTTP→404/405 │ →500│
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shoplist import __version__
from shoplist.config import Settings, settings as default_settings
from shoplist.exceptions import NotFoundError, ValidationError
from shoplist.middleware.logging import RequestLoggingMiddleware
from shoplist.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from shoplist.routes import pages, recipes, shopping_list
from shoplist.services.recipe_service import RecipeService
from shoplist.services.shopping_list_service import ShoppingListService

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s,
    written to stdout. RequestIDLogFilter fills `request_id` on every record
    ("-" outside a request). Uvicorn's own access log is silenced;
    RequestLoggingMiddleware replaces it.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, report where the landing page is served from.
    Shutdown: report how many entities are discarded (nothing is persisted).
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Shoplist Backend %s starting up...", __version__)
    logger.info("Landing page: %s", app_settings.views_root)

    yield

    logger.info(
        "Shoplist Backend shutting down, discarding %d shopping list item(s) and %d recipe(s)",
        len(app.state.shopping_list),
        len(app.state.recipes),
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse envelope.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (FastAPI body parsing)
        NotFoundError           → 404 Not Found
        HTTPException (router)  → 404 / 405 / other 4xx (unknown path, wrong method)
        Exception (fallback)    → 500 Internal Server Error

    Stack traces are logged, never returned.
    """

    def validation_response(exc: ValidationError) -> JSONResponse:
        rid = request_id_var.get("")
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input; tell them what's wrong."""
        return validation_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI rejected the body; report it as 400 like our own validation."""
        return validation_response(ValidationError.from_errors(exc.errors()))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested entity doesn't exist."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors (unknown path, wrong method) in the same envelope."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
                "message": str(exc.detail),
                "request_id": rid,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors."""
        rid = request_id_var.get("")
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Overrides the module-level settings singleton (tests).

    Returns:
        A FastAPI instance with fresh, empty collections on `app.state`.
    """
    app_settings = settings or default_settings

    app = FastAPI(
        title="Shoplist API",
        description="In-memory shopping list and recipe collections.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Application State ─────────────────────────────────────────────────
    app.state.settings = app_settings
    app.state.shopping_list = ShoppingListService()
    app.state.recipes = RecipeService()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(shopping_list.router)
    app.include_router(recipes.router)
    # Last: its /{asset_path:path} fallback matches any GET not claimed above
    app.include_router(pages.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `shoplist.main:app` to be importable
app = create_app()
