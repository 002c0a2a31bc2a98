"""
Logging setup for the Blog Publishing API.

Usage
-----
>>> from blog_api.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> logger = get_logger(__name__)
"""

from blog_api.monitoring.logging import (
    clear_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
    set_request_id,
    set_user_id,
)

__all__ = [
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
    "set_request_id",
    "set_user_id",
]
