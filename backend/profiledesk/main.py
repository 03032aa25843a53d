"""
ProfileDesk Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application.
How:   `create_app(settings)` builds the AppContext, registers middleware,
       exception handlers and routers, and returns the app. uvicorn serves
       the module-level `app` (uvicorn profiledesk.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  [Request ID] → [Access Log] → [CORS]       │
    │                                                          │
    │  Routes:                                                 │
    │   /signup /login /me          (auth.py, bearer on /me)   │
    │   /api/users[/{id}[/image]]   (profiles.py)              │
    │   /users[/bulk|/{id}] /search (members.py)               │
    │   / /health                   (health.py)                │
    │                                                          │
    │  Exception Handlers → {"success": false, "message", ...} │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → schema (DB_CREATE_ALL) → ready
    Shutdown: dispose the engine held by the AppContext
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from profiledesk import __version__
from profiledesk.config import Settings
from profiledesk.context import AppContext
from profiledesk.exceptions import DatabaseError, ProfileDeskError
from profiledesk.middleware.logging import RequestLoggingMiddleware
from profiledesk.middleware.request_id import RequestIDMiddleware
from profiledesk.routes import auth, health, members, profiles

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure root logging once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    One stdout handler; noisy third-party loggers are held at WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    context: AppContext = app.state.context
    settings = context.settings

    setup_logging(settings)
    logger.info("ProfileDesk Backend starting up (environment=%s)", settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    await context.startup()
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("ProfileDesk Backend shutting down...")
    await context.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(request: Request, message: str, error: Optional[str], **extra: Any) -> Dict[str, Any]:
    body = {
        "success": False,
        "message": message,
        "error": error,
        "request_id": getattr(request.state, "request_id", ""),
    }
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

    Handler hierarchy:
        DatabaseError           → 500, generic message, context logged only
        ProfileDeskError (base) → exc.status_code, exc.message
        RequestValidationError  → 400 with per-field `errors`
        Starlette HTTPException → 404 "Route not found" / detail otherwise
        Exception (fallback)    → 500; exception text only in development
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "Internal server error", exc.message),
        )

    @app.exception_handler(ProfileDeskError)
    async def handle_app_error(request: Request, exc: ProfileDeskError):
        rid = getattr(request.state, "request_id", "")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.message, exc.error_code),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=_error_body(request, "Validation failed", "validation_error", errors=errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, message, "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        settings: Settings = request.app.state.context.settings
        detail = str(exc) if settings.is_development else "Something went wrong"
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "Internal server error", detail),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Assemble the application around one AppContext.

    Args:
        settings: explicit configuration (tests); read from the
                  environment when omitted.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="ProfileDesk API",
        description=(
            "Account signup/login with bearer tokens, image-backed profiles "
            "and a member directory."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = AppContext.from_settings(settings)

    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(profiles.router)
    app.include_router(members.router)

    return app


app = create_app()
