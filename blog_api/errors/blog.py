"""Blog errors."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from blog_api.errors.base import BaseAppError
from blog_api.errors.database import DuplicateEntryError


class BlogValidationError(BaseAppError):
    """Raised when a blog field violates its constraints."""

    def __init__(self, detail: str = "Invalid blog data") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class BlogNotFoundError(BaseAppError):
    """Raised when a blog does not exist or is not visible to the caller."""

    def __init__(self, detail: str = "Blog not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class ForbiddenError(BaseAppError):
    """Raised when an authenticated caller does not own the blog."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class DuplicateTitleError(DuplicateEntryError):
    """Raised when another blog already uses the title."""

    def __init__(self, detail: str = "Blog with this title already exists") -> None:
        super().__init__(detail)
