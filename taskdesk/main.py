"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so tests can set env (and clear the
get_settings cache) before calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from taskdesk.api.v1 import api_router
from taskdesk.api.v1.endpoints import health
from taskdesk.core.config import get_settings
from taskdesk.core.exception_handlers import register_exception_handlers
from taskdesk.core.lifespan import create_lifespan
from taskdesk.core.limiter import limiter
from taskdesk.middleware import RequestIDMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
