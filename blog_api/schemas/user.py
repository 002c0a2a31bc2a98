"""
User schemas for account management.

Only what signup, login and the profile endpoint need: e-mail, password
and the public first/last name fields that blog search matches against.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator

from blog_api.models import UserDB


class UserCreate(BaseModel):
    """User signup model."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    email: EmailStr = Field(..., description="Email address", examples=["johndoe@gmail.com"])
    password: SecretStr = Field(
        ...,
        min_length=8,
        description="Password",
        examples=["Password123"],
    )
    first_name: str = Field(
        ...,
        alias="firstName",
        min_length=1,
        max_length=100,
        description="User first name",
        examples=["John"],
    )
    last_name: str = Field(
        ...,
        alias="lastName",
        min_length=1,
        max_length=100,
        description="User last name",
        examples=["Doe"],
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("first_name", "last_name", mode="after")
    @classmethod
    def strip_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            mssg = "First and last name cannot be blank"
            raise ValueError(mssg)
        return name


class UserLogin(BaseModel):
    """Login credentials."""

    email: EmailStr
    password: SecretStr

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModel):
    """User response model (never includes the password hash)."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_db(cls, user: UserDB) -> "UserResponse":
        return cls(
            id=user.uuid,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
