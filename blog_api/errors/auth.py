"""Authentication errors."""

from starlette.status import HTTP_401_UNAUTHORIZED

from blog_api.errors.base import BaseAppError


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class UnauthorizedError(UserAuthenticationError):
    """Raised when an operation needs a subject but the caller is anonymous."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password", HTTP_401_UNAUTHORIZED)
