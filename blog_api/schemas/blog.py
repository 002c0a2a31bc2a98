"""
Blog schemas for the Blog Publishing API.

Request bodies trim and validate their text fields here, so anything that
reaches the repository already satisfies the length and tag rules.
"""

from dataclasses import dataclass
from datetime import datetime
from math import ceil
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from blog_api.configs.settings import (
    BODY_MIN_LENGTH,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    MAX_TAGS,
    SORTABLE_FIELDS,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from blog_api.models import BlogDB, UserDB

type BlogState = Literal["draft", "published"]
type SortField = Literal["createdAt", "read_count", "reading_time"]
type SortOrder = Literal["asc", "desc"]

BLOG_STATES: tuple[str, ...] = ("draft", "published")


def clean_title(value: str) -> str:
    """Trim a title and enforce its length bounds."""
    title = value.strip()
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        mssg = f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
        raise ValueError(mssg)
    return title


def clean_description(value: str) -> str:
    """Trim a description and enforce its length bounds."""
    description = value.strip()
    if not DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
        mssg = (
            f"Description must be between {DESCRIPTION_MIN_LENGTH} "
            f"and {DESCRIPTION_MAX_LENGTH} characters"
        )
        raise ValueError(mssg)
    return description


def clean_body(value: str) -> str:
    """Trim a body and enforce its minimum length."""
    body = value.strip()
    if len(body) < BODY_MIN_LENGTH:
        mssg = f"Body must be at least {BODY_MIN_LENGTH} characters"
        raise ValueError(mssg)
    return body


def clean_tags(tags: list[str]) -> list[str]:
    """Strip tags, drop blank ones and keep at most the first ten."""
    return [tag.strip() for tag in tags if tag.strip()][:MAX_TAGS]


class BlogCreate(BaseModel):
    """Blog creation model (request body - excludes system-managed fields)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Getting Started with Async Python",
                "description": "A gentle tour of asyncio for web developers",
                "body": "Async Python lets a single process juggle thousands of connections "
                "without threads, as long as every slow call is awaited.",
                "tags": ["python", "asyncio"],
            },
        },
    )

    title: str = Field(..., description="Blog title (5-200 characters, unique)")
    description: str = Field(..., description="Short description (10-500 characters)")
    body: str = Field(..., description="Blog body (at least 50 characters)")
    tags: list[str] = Field(
        default_factory=list,
        description="Blog tags; blank tags are dropped and only the first 10 are kept",
    )

    @model_validator(mode="before")
    @classmethod
    def require_content(cls, data: Any) -> Any:
        """Reject payloads missing title, description or body."""
        if isinstance(data, dict) and not all(
            data.get(key) for key in ("title", "description", "body")
        ):
            mssg = "Title, description, and body are required"
            raise ValueError(mssg)
        return data

    @field_validator("title", mode="after")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return clean_title(v)

    @field_validator("description", mode="after")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return clean_description(v)

    @field_validator("body", mode="after")
    @classmethod
    def validate_body(cls, v: str) -> str:
        return clean_body(v)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: list[str] | None) -> list[str]:
        return [] if v is None else v

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return clean_tags(v)


class BlogUpdate(BaseModel):
    """
    Blog update model (all fields optional).

    Empty strings count as absent, an empty tag list clears the tags.
    Author and state are not part of this model, so they cannot be
    changed through an update.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Getting Started with Async Python (2nd edition)",
                "tags": ["python", "asyncio", "updated"],
            },
        },
    )

    title: str | None = None
    description: str | None = None
    body: str | None = None
    tags: list[str] | None = None

    @field_validator("title", "description", "body", mode="before")
    @classmethod
    def empty_as_absent(cls, v: Any) -> Any:
        return v or None

    @field_validator("title", mode="after")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else clean_title(v)

    @field_validator("description", mode="after")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return None if v is None else clean_description(v)

    @field_validator("body", mode="after")
    @classmethod
    def validate_body(cls, v: str | None) -> str | None:
        return None if v is None else clean_body(v)

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else clean_tags(v)


class BlogStateUpdate(BaseModel):
    """Requested state for a blog; checked by the service before ownership."""

    state: str | None = Field(default=None, examples=["published"])


class AuthorResponse(BaseModel):
    """Author information for blog responses (without sensitive data)."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")

    @classmethod
    def from_user(cls, user: UserDB) -> "AuthorResponse":
        return cls(
            id=user.uuid,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class BlogResponse(BaseModel):
    """Blog response model."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    description: str
    body: str
    author: AuthorResponse | None = None
    state: BlogState
    read_count: int
    reading_time: int
    tags: list[str]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_db(cls, blog: BlogDB, author: UserDB | None = None) -> "BlogResponse":
        return cls(
            id=blog.id,
            title=blog.title,
            description=blog.description,
            body=blog.body,
            author=AuthorResponse.from_user(author) if author else None,
            state=blog.state,
            read_count=blog.read_count,
            reading_time=blog.reading_time,
            tags=list(blog.tags or []),
            created_at=blog.created_at,
            updated_at=blog.updated_at,
        )


class Pagination(BaseModel):
    """Pagination block returned with every listing."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_blogs: int = Field(alias="totalBlogs")
    blogs_per_page: int = Field(alias="blogsPerPage")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=ceil(total / limit),
            total_blogs=total,
            blogs_per_page=limit,
        )


class BlogPage(BaseModel):
    """One page of a blog listing."""

    items: list[BlogResponse]
    pagination: Pagination


def parse_positive_int(raw: str | int | None, default: int) -> int:
    """
    Parse a query parameter, falling back to `default` for missing,
    non-numeric or zero values.
    """
    try:
        value = int(raw) if raw is not None else 0
    except (TypeError, ValueError):
        return default
    return value or default


@dataclass(frozen=True)
class PageQuery:
    """Normalized page number and size; both are clamped to their bounds."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_params(cls, page: str | int | None, limit: str | int | None) -> "PageQuery":
        return cls(
            page=max(1, min(MAX_PAGE, parse_positive_int(page, DEFAULT_PAGE))),
            limit=max(1, min(MAX_PAGE_SIZE, parse_positive_int(limit, DEFAULT_PAGE_SIZE))),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PublicListQuery:
    """
    Query container for the public (published-only) listing.

    Unknown sort fields fall back to `createdAt`; any order other than
    `asc` means descending.
    """

    paging: PageQuery = PageQuery()
    search: str | None = None
    sort_by: SortField = DEFAULT_SORT_FIELD
    order: SortOrder = "desc"

    @classmethod
    def from_params(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        order: str | None = None,
    ) -> "PublicListQuery":
        return cls(
            paging=PageQuery.from_params(page, limit),
            search=search.strip() if search and search.strip() else None,
            sort_by=sort_by if sort_by in SORTABLE_FIELDS else DEFAULT_SORT_FIELD,
            order="asc" if order and order.lower() == "asc" else "desc",
        )


@dataclass(frozen=True)
class OwnerListQuery:
    """Query container for the caller's own blogs; unknown states are ignored."""

    paging: PageQuery = PageQuery()
    state: BlogState | None = None

    @classmethod
    def from_params(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
        state: str | None = None,
    ) -> "OwnerListQuery":
        return cls(
            paging=PageQuery.from_params(page, limit),
            state=state if state in BLOG_STATES else None,
        )
