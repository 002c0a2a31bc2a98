"""Custom validation error handling for FastAPI."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from blog_api.errors.base import error_response
from blog_api.monitoring import get_logger
from blog_api.utils.helpers import host

logger = get_logger(__name__)


def format_validation_error(error: dict[str, Any], *, located: bool = True) -> str:
    """
    Render one pydantic error as a client-facing message.

    Errors raised by our own validators carry their message verbatim;
    structural errors (missing field, wrong type) are prefixed by the
    field path. `located` errors come from FastAPI and start with a
    location such as `body` or `query`.
    """
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])

    loc = list(error.get("loc", []))
    field = ".".join(str(part) for part in (loc[1:] if located else loc))
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with the standard failure envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with the first violated rule as the error message.
    """
    exec_error = cast(RequestValidationError, exc)
    errors = exec_error.errors()
    message = format_validation_error(errors[0]) if errors else "Validation failed"

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {message}",
    )

    return error_response(HTTP_400_BAD_REQUEST, message)
