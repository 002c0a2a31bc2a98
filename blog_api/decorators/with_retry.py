"""
Exponential-backoff retry for async calls that can fail transiently.

Two call sites use it: opening the database at startup (the server may
still be booting next to the API) and password hashing (the argon2
backend can fail under memory pressure).
"""

from collections.abc import Awaitable, Callable
from logging import WARNING

from sqlalchemy.exc import InterfaceError, OperationalError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from blog_api.monitoring import get_logger

logger = get_logger(__name__)

type ExceptionTypes = type[Exception] | tuple[type[Exception], ...]

# Errors raised while a database server is unreachable or restarting
TRANSIENT_DB_ERRORS: tuple[type[Exception], ...] = (
    OperationalError,
    InterfaceError,
    ConnectionError,
    TimeoutError,
)


def with_retry[**P, T](
    exec_retry: ExceptionTypes = TRANSIENT_DB_ERRORS,
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async function on `exec_retry` errors.

    Args:
        exec_retry: Exception type(s) worth retrying; anything else propagates at once.
        max_retries: Total attempts, the first call included.
        base_delay: Wait before the second attempt, doubled after each failure.
        max_delay: Upper bound for a single wait.

    Returns:
        Decorator; the last error is re-raised once attempts run out.
    """
    return retry(
        retry=retry_if_exception_type(exec_retry),
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        before_sleep=before_sleep_log(logger, WARNING),  # type: ignore[arg-type]
        reraise=True,
    )
