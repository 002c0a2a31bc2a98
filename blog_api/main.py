"""Blog Publishing API - draft/publish blogging with ownership-based access."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.configs import settings
from blog_api.db import ping
from blog_api.errors import (
    BaseAppError,
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from blog_api.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blog_api.monitoring import get_logger
from blog_api.routes import auth_router, blog_router
from blog_api.schemas import success_response
from blog_api.utils.helpers import today_str

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog publishing API with drafts, ownership and search",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

routes = [auth_router, blog_router]

_ = [app.include_router(router) for router in routes]

errors = [
    (BaseAppError, app_exception_handler),
    (StarletteHTTPException, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "statusCode": 200,
                        "data": {
                            "version": "1.0.0",
                            "status": "ok",
                            "timestamp": "2025-01-01 10:00:00",
                            "database": "connected",
                        },
                        "success": True,
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> ORJSONResponse:
    """
    Health check endpoint.

    Returns
    -------
    ORJSONResponse
        API version, timestamp and database reachability.
    """
    try:
        database_status = "connected" if await ping() else "unavailable"
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        database_status = "unavailable"

    return success_response(
        {
            "version": app.version,
            "status": "ok" if database_status == "connected" else "degraded",
            "timestamp": today_str(),
            "database": database_status,
        },
    )
