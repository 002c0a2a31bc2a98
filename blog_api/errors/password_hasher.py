from blog_api.errors.base import BaseAppError


class PasswordHashingError(BaseAppError):
    """Raised when the argon2 backend fails to hash a password."""

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)
