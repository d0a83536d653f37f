"""
Catalog API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance.
Who:   uvicorn (uvicorn app.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────┐ ┌──────────┐ ┌─────────┐ ┌──────┐         │
    │  │ CORS │→│  Req ID  │→│ Logging │→│ GZip │         │
    │  └──────┘ └──────────┘ └─────────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────────────┐ ┌──────────────┐           │
    │  │ /api/products[/id]  │ │ GET /health  │           │
    │  └─────────────────────┘ └──────────────┘           │
    │                                                     │
    │  Exception Classifier (app/error_handling.py):      │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 422 │ 401 │ 404 │ 405 │ 403 │ 400 │ 500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log listen address
    Shutdown: dispose database engine
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.error_handling import register_exception_handlers
from app.logging_config import setup_logging
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware
from app.routes import health, products

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("%s %s starting up", settings.app_name, __version__)
    if settings.debug:
        logger.warning("DEBUG is enabled: 500 responses include exception traces")
    if not settings.api_key:
        logger.warning("API_KEY is not set: write endpoints are unauthenticated")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("%s shutting down", settings.app_name)
    await dispose_engine()
    logger.info("Shutdown complete.")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call, so tests can build isolated apps.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Product catalog API with uniform JSON response envelopes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: CORS → RequestID → Logging → GZip
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
