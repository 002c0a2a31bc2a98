"""User repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.errors.database import DatabaseError, DuplicateEntryError
from blog_api.models.user import UserDB
from blog_api.repositories.filters import contains
from blog_api.schemas.user import UserCreate


class UserRepository:
    """
    Repository for User database operations.

    Password hashing happens before this layer; the repository only
    stores the resulting hash.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, user: UserCreate, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: Validated signup schema
            password_hash: Argon2 hash of the user's password

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(
            email=user.email,
            password_hash=password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
        )

        try:
            self.session.add(db_user)
            await self.session.flush()
            await self.session.refresh(db_user)
            return db_user
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "email" in error_msg.lower():
                raise DuplicateEntryError(detail="Email already registered") from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(select(UserDB).where(UserDB.uuid == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for (already lower-cased)

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(select(UserDB).where(UserDB.email == email))
        return result.scalar_one_or_none()

    async def get_by_ids(self, user_ids: Iterable[UUID]) -> dict[UUID, UserDB]:
        """Load several users at once, keyed by id."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(UserDB).where(UserDB.uuid.in_(ids)))
        return {user.uuid: user for user in result.scalars().all()}

    async def ids_matching_name(self, text: str) -> list[UUID]:
        """Ids of users whose first or last name contains `text` (case-insensitive)."""
        result = await self.session.execute(
            select(UserDB.uuid).where(
                or_(contains(UserDB.first_name, text), contains(UserDB.last_name, text)),
            ),
        )
        return list(result.scalars().all())
