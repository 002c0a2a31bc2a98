from blog_api.errors.auth import (
    InvalidCredentialsError,
    UnauthorizedError,
    UserAuthenticationError,
)
from blog_api.errors.base import (
    BaseAppError,
    create_exception_handler,
    create_unhandled_exception_handler,
    error_response,
)
from blog_api.errors.blog import (
    BlogNotFoundError,
    BlogValidationError,
    DuplicateTitleError,
    ForbiddenError,
)
from blog_api.errors.database import (
    DatabaseError,
    DuplicateEntryError,
)
from blog_api.errors.password_hasher import PasswordHashingError
from blog_api.errors.validation import format_validation_error, validation_exception_handler
from blog_api.monitoring import get_logger

logger = get_logger(__name__)

app_exception_handler = create_exception_handler(logger)
unhandled_exception_handler = create_unhandled_exception_handler(logger)

__all__ = [
    "BaseAppError",
    "BlogNotFoundError",
    "BlogValidationError",
    "DatabaseError",
    "DuplicateEntryError",
    "DuplicateTitleError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "UnauthorizedError",
    "UserAuthenticationError",
    "app_exception_handler",
    "create_exception_handler",
    "create_unhandled_exception_handler",
    "error_response",
    "format_validation_error",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
