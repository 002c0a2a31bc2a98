"""
Structured logging for the Blog Publishing API.

Every log line goes through structlog and ends up on the standard library
root logger, so uvicorn and SQLAlchemy records get the same rendering as
our own. Development renders colored console lines; every other
environment renders one JSON object per line.

Redaction
---------
Before rendering, each event is scrubbed:
- credential-bearing keys (`password`, `token`, ...) are replaced wholesale
- `Authorization` and `Cookie` headers are masked
- JWTs and e-mail addresses inside free text are masked
- newlines and other control characters are escaped

Examples
--------
>>> from blog_api.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Blog published", blog_id="123")
"""

from logging import Handler, StreamHandler, root
from logging.handlers import RotatingFileHandler
from pathlib import Path as SyncPath
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from blog_api.configs.settings import settings

REDACTED = "[REDACTED]"

SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {"authorization", "cookie", "set-cookie", "proxy-authorization"},
)

# Keys whose values are never logged, whatever they contain
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"password", "password_hash", "token", "access_token", "secret_key"},
)

# JWTs contain dots, so they are masked before e-mails
PII_PATTERNS: tuple[tuple[Pattern, str], ...] = (
    (re_compile(r"eyJ[\w-]*\.eyJ[\w-]*\.[\w-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[\w.%+-]+@[\w.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
)

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters so one event always renders as one line.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return str(message).translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Mask credential headers, matching names case-insensitively.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer abc", "Accept": "json"})
    {'Authorization': '[REDACTED]', 'Accept': 'json'}
    """
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def redact_pii(message: str) -> str:
    """
    Mask tokens and e-mail addresses inside free text.

    Examples:
    --------
    >>> redact_pii("Login failed for ada@example.com")
    'Login failed for [REDACTED_EMAIL]'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """structlog processor applying every redaction rule to one event."""
    for key, value in event_dict.items():
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)
        elif isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
    return event_dict


def add_service(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag JSON events with the app and environment they came from."""
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def _shared_processors() -> list[Processor]:
    """Processors run for both structlog and foreign (stdlib) records."""
    return [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        sanitize_event_dict,
    ]


def _renderer(*, colors: bool) -> Processor:
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def _handler(handler: Handler, *, colors: bool) -> Handler:
    chain = [ExtraAdder()]
    if settings.ENVIRONMENT != "development":
        chain.append(add_service)

    handler.setFormatter(
        ProcessorFormatter(
            processors=[
                *chain,
                ProcessorFormatter.remove_processors_meta,
                _renderer(colors=colors),
            ],
            foreign_pre_chain=_shared_processors(),
        ),
    )
    return handler


def configure_logging() -> None:
    """
    Route structlog and stdlib logging through the same handlers.

    Safe to call more than once (uvicorn reloads): existing root
    handlers are replaced, not duplicated.
    """
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            add_logger_name,
            PositionalArgumentsFormatter(),
            *_shared_processors(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    root.addHandler(_handler(StreamHandler(), colors=True))

    if settings.LOG_TO_FILE:
        log_file = SyncPath(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
        )
        root.addHandler(_handler(file_handler, colors=False))


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger named after the calling module."""
    return struct_logger(name)


def set_request_id(request_id: str) -> None:
    """Attach the request id to every event logged while handling the request."""
    bind_contextvars(request_id=request_id)


def set_user_id(user_id: str) -> None:
    """Attach the resolved caller to every event logged for the request."""
    bind_contextvars(user_id=user_id)


def clear_context() -> None:
    """Drop request-scoped context at the start of each request."""
    clear_contextvars()
