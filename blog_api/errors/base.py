from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from blog_api.configs.settings import DEFAULT_ERROR_MESSAGE
from blog_api.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def error_response(
    status_code: int,
    error: str,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    """Build the failure envelope."""
    return ORJSONResponse(
        content={"statusCode": status_code, "error": error, "success": False},
        status_code=status_code,
        headers=headers,
    )


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Server-side errors are logged with their detail but answered with a
    generic message.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", DEFAULT_ERROR_MESSAGE)
        headers = getattr(exc, "headers", None)

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{detail} for ip: {host(request)} for endpoint {request.url.path}",
            )
            return error_response(status_code, DEFAULT_ERROR_MESSAGE)

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")
        return error_response(status_code, detail, headers)

    return handler


def create_unhandled_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """Create the catch-all handler that hides internals behind a 500."""

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception(
            f"Unhandled error for ip: {host(request)} for endpoint {request.url.path}",
            exc_info=exc,
        )
        return error_response(HTTP_500_INTERNAL_SERVER_ERROR, DEFAULT_ERROR_MESSAGE)

    return handler
