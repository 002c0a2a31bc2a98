"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from blog_api.configs.settings import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    The title carries a unique index so concurrent writers racing on the
    same title are rejected by the database itself.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_state_created", "state", "created_at"),
        Index("ix_blogs_author_state", "author_id", "state"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User, never reassigned after creation
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.uuid)",
    )

    title: str = Field(
        sa_column=Column(String(TITLE_MAX_LENGTH), unique=True, nullable=False, index=True),
        description="Blog title (unique)",
    )
    description: str = Field(
        sa_column=Column(String(DESCRIPTION_MAX_LENGTH), nullable=False),
        description="Short description",
    )
    body: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog body",
    )
    state: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True, server_default="draft"),
        description="Blog state (draft, published)",
    )
    read_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, index=True, server_default="0"),
        description="Number of successful reads",
    )
    reading_time: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False),
        description="Estimated reading time in minutes",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
        description="Blog tags (max 10)",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Getting Started with Async Python",
                "description": "A gentle tour of asyncio for web developers",
                "body": "Async Python lets a single process juggle thousands of connections...",
                "state": "draft",
                "read_count": 0,
                "reading_time": 1,
                "tags": ["python", "asyncio"],
            },
        },
    )
