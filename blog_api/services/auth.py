"""Authentication service: signup, login and profile lookup."""

from uuid import UUID

from blog_api.errors import DuplicateEntryError, InvalidCredentialsError, UnauthorizedError
from blog_api.managers.password_manager import hash_password, verify_password
from blog_api.managers.token_manager import create_access_token
from blog_api.models import UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories import UserRepository
from blog_api.schemas.auth import Token
from blog_api.schemas.user import UserCreate, UserLogin

logger = get_logger(__name__)


class AuthService:
    """Service for handling user accounts and credentials."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, user: UserCreate) -> UserDB:
        """
        Create an account.

        Args:
            user: Validated signup data

        Returns:
            UserDB: The new user

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        if await self.user_repo.get_by_email(user.email):
            mssg = "Email already registered"
            raise DuplicateEntryError(mssg)

        password_hash = await hash_password(user.password.get_secret_value())
        db_user = await self.user_repo.create(user, password_hash)
        logger.info("User registered", user_id=str(db_user.uuid))
        return db_user

    async def authenticate_user(self, credentials: UserLogin) -> UserDB:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(credentials.email)
        password = credentials.password.get_secret_value()

        if not user:
            # Same hashing cost as a wrong password
            await verify_password(password, None)
            raise InvalidCredentialsError

        if not await verify_password(password, user.password_hash):
            raise InvalidCredentialsError
        return user

    def create_token_for_user(self, user: UserDB) -> Token:
        """Issue an access token whose subject is the user's id."""
        return Token(access_token=create_access_token(user_id=user.uuid))

    async def get_profile(self, user_id: UUID) -> UserDB:
        """
        Load the caller's account.

        Raises:
            UnauthorizedError: If the token's user no longer exists
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            mssg = "User not found"
            raise UnauthorizedError(mssg)
        return user
