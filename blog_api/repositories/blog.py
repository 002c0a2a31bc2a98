"""Blog repository for database operations."""

from uuid import UUID

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.errors.auth import UnauthorizedError
from blog_api.errors.blog import DuplicateTitleError
from blog_api.errors.database import DatabaseError
from blog_api.models.blog import BlogDB, utc_now
from blog_api.monitoring import get_logger
from blog_api.repositories.filters import authored_by, matches_search, sort_order, state_is
from blog_api.schemas.blog import BlogCreate, BlogUpdate, OwnerListQuery, PublicListQuery
from blog_api.utils.reading_time import calculate_reading_time

logger = get_logger(__name__)


class BlogRepository:
    """
    Repository for Blog database operations.

    Persistence only: callers decide who may do what. Text fields arrive
    already trimmed and validated by the request schemas.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, blog: BlogCreate, author_id: UUID) -> BlogDB:
        """
        Create a new draft blog.

        Args:
            blog: Validated creation schema
            author_id: UUID of the blog author

        Returns:
            BlogDB: Created blog with read_count 0 and computed reading time

        Raises:
            DuplicateTitleError: If the title is already taken
        """
        if await self.title_exists(blog.title):
            raise DuplicateTitleError

        now = utc_now()
        db_blog = BlogDB(
            author_id=author_id,
            title=blog.title,
            description=blog.description,
            body=blog.body,
            state="draft",
            read_count=0,
            reading_time=calculate_reading_time(blog.body),
            tags=blog.tags,
            created_at=now,
            updated_at=now,
        )
        self.session.add(db_blog)
        await self._flush_and_refresh(db_blog)
        logger.info("Blog created", blog_id=str(db_blog.id), author_id=str(author_id))
        return db_blog

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        """
        Get blog by ID.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self.session.execute(select(BlogDB).where(BlogDB.id == blog_id))
        return result.scalar_one_or_none()

    async def title_exists(self, title: str, exclude_id: UUID | None = None) -> bool:
        """
        Check whether a blog other than `exclude_id` already uses the title.

        Args:
            title: Title to look up
            exclude_id: Blog to ignore (the one being updated)
        """
        statement = select(1).where(BlogDB.title == title)
        if exclude_id is not None:
            statement = statement.where(BlogDB.id != exclude_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def update(self, blog_id: UUID, blog_update: BlogUpdate) -> BlogDB | None:
        """
        Apply a partial update to a blog.

        Args:
            blog_id: Blog UUID
            blog_update: Fields to change; absent fields are left untouched

        Returns:
            BlogDB | None: Updated blog if found, None otherwise

        Raises:
            DuplicateTitleError: If the new title belongs to another blog
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return None

        update_data = blog_update.model_dump(exclude_unset=True, exclude_none=True)

        if "title" in update_data and update_data["title"] != db_blog.title:
            if await self.title_exists(update_data["title"], exclude_id=blog_id):
                raise DuplicateTitleError

        # Recalculate reading time if the body changes
        if "body" in update_data:
            update_data["reading_time"] = calculate_reading_time(update_data["body"])

        update_data["updated_at"] = utc_now()

        for key, value in update_data.items():
            setattr(db_blog, key, value)

        await self._flush_and_refresh(db_blog)
        return db_blog

    async def set_state(self, blog_id: UUID, state: str) -> BlogDB | None:
        """
        Set the publication state of a blog.

        Args:
            blog_id: Blog UUID
            state: "draft" or "published"

        Returns:
            BlogDB | None: Updated blog if found, None otherwise
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return None

        db_blog.state = state
        db_blog.updated_at = utc_now()
        await self._flush_and_refresh(db_blog)
        return db_blog

    async def delete(self, blog_id: UUID) -> bool:
        """
        Delete blog by ID.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: True if blog was deleted, False if not found
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return False

        await self.session.delete(db_blog)
        await self.session.flush()
        return True

    async def increment_read_count(self, blog_id: UUID) -> BlogDB | None:
        """
        Atomically add one to a blog's read count.

        The increment is a single UPDATE ... RETURNING, so concurrent
        readers never lose an update.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB | None: Blog with its new read count, None if it vanished
        """
        statement = (
            update(BlogDB)
            .where(BlogDB.id == blog_id)
            .values(read_count=BlogDB.read_count + 1)
            .returning(BlogDB)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_published(
        self,
        query: PublicListQuery,
        author_ids: list[UUID] | None = None,
    ) -> tuple[list[BlogDB], int]:
        """
        List published blogs with optional search and sorting.

        Args:
            query: Normalized listing query
            author_ids: Authors whose names matched the search text

        Returns:
            tuple[list[BlogDB], int]: One page of blogs and the total match count
        """
        conditions = [state_is("published")]
        if query.search:
            conditions.append(matches_search(query.search, author_ids or []))

        return await self._page(
            conditions,
            order_by=sort_order(query.sort_by, query.order),
            skip=query.paging.skip,
            limit=query.paging.limit,
        )

    async def list_by_author(
        self,
        author_id: UUID,
        query: OwnerListQuery,
    ) -> tuple[list[BlogDB], int]:
        """
        List one author's blogs, newest first, optionally filtered by state.

        Args:
            author_id: Author UUID
            query: Normalized listing query

        Returns:
            tuple[list[BlogDB], int]: One page of blogs and the total match count
        """
        conditions = [authored_by(author_id)]
        if query.state:
            conditions.append(state_is(query.state))

        return await self._page(
            conditions,
            order_by=sort_order("createdAt", "desc"),
            skip=query.paging.skip,
            limit=query.paging.limit,
        )

    async def _page(
        self,
        conditions: list[ColumnElement[bool]],
        order_by: tuple,
        skip: int,
        limit: int,
    ) -> tuple[list[BlogDB], int]:
        count_result = await self.session.execute(
            select(func.count()).select_from(BlogDB).where(*conditions),
        )
        total = count_result.scalar() or 0

        result = await self.session.execute(
            select(BlogDB).where(*conditions).order_by(*order_by).offset(skip).limit(limit),
        )
        return list(result.scalars().all()), total

    async def _flush_and_refresh(self, db_blog: BlogDB) -> None:
        """
        Flush pending changes, mapping unique violations on the title.

        Raises:
            DuplicateTitleError: If a concurrent writer took the title first
            UnauthorizedError: If the author no longer exists
            DatabaseError: For other integrity errors
        """
        try:
            await self.session.flush()
            await self.session.refresh(db_blog)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "title" in error_msg.lower():
                raise DuplicateTitleError from e
            if "foreign key" in error_msg.lower():
                raise UnauthorizedError("User not found") from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
