"""
Blog operations: the access rules of `blog_api.auth.permissions` applied
around the repository.

Every method takes the caller explicitly as `subject` (None when
anonymous). Drafts are hidden from non-owners as 404; edits by
non-owners are refused with 403.
"""

from typing import Any
from uuid import UUID

from pydantic import ValidationError

from blog_api.auth.identity import Subject, require_subject
from blog_api.auth.permissions import BlogAction, can_perform
from blog_api.errors import (
    BlogNotFoundError,
    BlogValidationError,
    ForbiddenError,
    format_validation_error,
)
from blog_api.models import BlogDB
from blog_api.monitoring import get_logger
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.schemas.blog import (
    BLOG_STATES,
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogUpdate,
    OwnerListQuery,
    Pagination,
    PublicListQuery,
)

logger = get_logger(__name__)

FORBIDDEN_MESSAGES = {
    BlogAction.EDIT: "You can only edit your own blogs",
    BlogAction.DELETE: "You can only delete your own blogs",
    BlogAction.CHANGE_STATE: "You can only change state of your own blogs",
}


def parse_blog_id(raw: str) -> UUID:
    """
    Parse a blog id from the URL.

    Raises:
        BlogValidationError: If the id is not a UUID
    """
    try:
        return UUID(raw)
    except (TypeError, ValueError) as e:
        mssg = "Invalid blog ID"
        raise BlogValidationError(mssg) from e


class BlogService:
    """Service for blog reads, mutations and listings."""

    def __init__(self, blog_repo: BlogRepository, user_repo: UserRepository) -> None:
        """
        Initialize the blog service.

        Args:
            blog_repo: Blog repository for database operations
            user_repo: User repository used to attach authors and match names
        """
        self.blog_repo = blog_repo
        self.user_repo = user_repo

    async def create(self, subject: Subject, payload: BlogCreate) -> BlogResponse:
        """
        Create a draft owned by the caller.

        Raises:
            UnauthorizedError: If the caller is anonymous
            DuplicateTitleError: If the title is taken
        """
        author_id = require_subject(subject)
        db_blog = await self.blog_repo.create(payload, author_id)
        return await self._with_author(db_blog)

    async def read(self, subject: Subject, raw_id: str) -> BlogResponse:
        """
        Fetch one blog and count the read.

        Only reads the caller is allowed to see are counted, so probing
        someone else's draft leaves its counter untouched.

        Raises:
            BlogValidationError: If the id is malformed
            BlogNotFoundError: If the blog is missing or not visible
        """
        blog_id = parse_blog_id(raw_id)
        db_blog = await self.blog_repo.get_by_id(blog_id)
        if not db_blog or not can_perform(subject, db_blog, BlogAction.VIEW):
            raise BlogNotFoundError

        counted = await self.blog_repo.increment_read_count(blog_id)
        if not counted:
            raise BlogNotFoundError
        return await self._with_author(counted)

    async def update(
        self,
        subject: Subject,
        raw_id: str,
        payload: dict[str, Any] | None,
    ) -> BlogResponse:
        """
        Apply a partial update as the blog's author.

        The payload is validated only after existence and ownership have
        been established, so a non-owner always gets 403.

        Raises:
            UnauthorizedError: If the caller is anonymous
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the caller is not the author
            BlogValidationError: If a field breaks its rules
            DuplicateTitleError: If the new title is taken
        """
        blog_id = await self._authorize(subject, raw_id, BlogAction.EDIT)
        changes = self._parse_update(payload)

        db_blog = await self.blog_repo.update(blog_id, changes)
        if not db_blog:
            raise BlogNotFoundError
        logger.info("Blog updated", blog_id=str(blog_id))
        return await self._with_author(db_blog)

    async def delete(self, subject: Subject, raw_id: str) -> None:
        """
        Permanently delete a blog as its author.

        Raises:
            UnauthorizedError: If the caller is anonymous
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the caller is not the author
        """
        blog_id = await self._authorize(subject, raw_id, BlogAction.DELETE)
        if not await self.blog_repo.delete(blog_id):
            raise BlogNotFoundError
        logger.info("Blog deleted", blog_id=str(blog_id))

    async def change_state(
        self,
        subject: Subject,
        raw_id: str,
        state: str | None,
    ) -> BlogResponse:
        """
        Publish or unpublish a blog as its author.

        The requested state is checked before the blog is even looked up.

        Raises:
            UnauthorizedError: If the caller is anonymous
            BlogValidationError: If the state is not draft/published
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the caller is not the author
        """
        require_subject(subject)
        if state not in BLOG_STATES:
            mssg = "State must be 'draft' or 'published'"
            raise BlogValidationError(mssg)

        blog_id = await self._authorize(subject, raw_id, BlogAction.CHANGE_STATE)
        db_blog = await self.blog_repo.set_state(blog_id, state)
        if not db_blog:
            raise BlogNotFoundError
        logger.info("Blog state changed", blog_id=str(blog_id), state=state)
        return await self._with_author(db_blog)

    async def list_published(self, query: PublicListQuery) -> BlogPage:
        """List published blogs for anyone, with search, sort and paging."""
        author_ids = await self.user_repo.ids_matching_name(query.search) if query.search else []
        blogs, total = await self.blog_repo.list_published(query, author_ids)
        return await self._page(blogs, total, query.paging.page, query.paging.limit)

    async def list_mine(self, subject: Subject, query: OwnerListQuery) -> BlogPage:
        """
        List the caller's own blogs, newest first.

        Raises:
            UnauthorizedError: If the caller is anonymous
        """
        author_id = require_subject(subject)
        blogs, total = await self.blog_repo.list_by_author(author_id, query)
        return await self._page(blogs, total, query.paging.page, query.paging.limit)

    async def _authorize(self, subject: Subject, raw_id: str, action: BlogAction) -> UUID:
        """Resolve the id and check that the caller may perform `action` on it."""
        require_subject(subject)
        blog_id = parse_blog_id(raw_id)
        db_blog = await self.blog_repo.get_by_id(blog_id)
        if not db_blog:
            raise BlogNotFoundError
        if not can_perform(subject, db_blog, action):
            raise ForbiddenError(FORBIDDEN_MESSAGES[action])
        return blog_id

    @staticmethod
    def _parse_update(payload: dict[str, Any] | None) -> BlogUpdate:
        try:
            return BlogUpdate.model_validate(payload or {})
        except ValidationError as e:
            raise BlogValidationError(format_validation_error(e.errors()[0], located=False)) from e

    async def _with_author(self, db_blog: BlogDB) -> BlogResponse:
        author = await self.user_repo.get_by_id(db_blog.author_id)
        return BlogResponse.from_db(db_blog, author)

    async def _page(self, blogs: list[BlogDB], total: int, page: int, limit: int) -> BlogPage:
        authors = await self.user_repo.get_by_ids(blog.author_id for blog in blogs)
        return BlogPage(
            items=[BlogResponse.from_db(blog, authors.get(blog.author_id)) for blog in blogs],
            pagination=Pagination.build(page, limit, total),
        )
