"""
Middleware components for the Blog Publishing API.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan handler that configures logging
and opens and closes the database.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from blog_api.configs import settings
from blog_api.db import close_db, init_db
from blog_api.monitoring import clear_context, configure_logging, get_logger, set_request_id
from blog_api.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown."""
    configure_logging()
    logger.info(f"Starting {app.title}...")

    try:
        await init_db()
        logger.info("Services initialized successfully")
        base_url = f"http://{settings.HOST}:{settings.PORT}"
        logger.info(f"API documentation at {base_url}/docs")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    # Credentials are needed for the auth cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing, correlated by request id."""
        clear_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        set_request_id(request_id)

        start_time = perf_counter()
        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            route=get_summary(request),
            client=host(request),
        )

        response = await call_next(request)
        duration = perf_counter() - start_time

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request finished",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
