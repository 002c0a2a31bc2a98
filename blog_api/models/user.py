"""User database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from blog_api.models.blog import utc_now


class UserDB(SQLModel, table=True):
    """
    User database model.

    Only the id and the public name fields are consumed by the blog core;
    the rest belongs to account management.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    uuid: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Argon2 password hash",
    )
    first_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="User first name",
    )
    last_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="User last name",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
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
                "uuid": "123e4567-e89b-12d3-a456-426614174000",
                "email": "johndoe@gmail.com",
                "first_name": "John",
                "last_name": "Doe",
            },
        },
    )
