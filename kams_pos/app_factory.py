"""
Application factory for the KAMS POS API.

create_app() builds a fully wired FastAPI application. main.py calls it once
at import time; tests call it too and override get_db and
get_identity_provider through app.dependency_overrides.
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from . import __version__, config
from .middleware import RequestIDMiddleware
from .routes import (
    analytics_router,
    auth_router,
    customers_router,
    menu_categories_router,
    menu_items_router,
    menu_router,
    modifier_groups_router,
    modifiers_router,
    orders_router,
    store_router,
    users_router,
)
from .routes.auth import limiter

logger = logging.getLogger(__name__)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Turn unexpected persistence failures into a generic 500."""
    request_id = getattr(request.state, "request_id", "-")
    logger.error(
        "Database error on %s %s [%s]",
        request.method,
        request.url.path,
        request_id,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    logger.info("Creating KAMS POS application (environment=%s)", config.ENVIRONMENT)

    app = FastAPI(
        title="KAMS POS API",
        description="Point-of-sale API for a pizzeria: menu, orders, customers and till logins",
        version=__version__,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    api = APIRouter(prefix="/api")
    api.include_router(auth_router)
    api.include_router(users_router)
    api.include_router(store_router)
    api.include_router(menu_router)
    api.include_router(menu_categories_router)
    api.include_router(menu_items_router)
    api.include_router(modifier_groups_router)
    api.include_router(modifiers_router)
    api.include_router(customers_router)
    api.include_router(orders_router)
    api.include_router(analytics_router)
    app.include_router(api)

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "version": __version__}

    return app
