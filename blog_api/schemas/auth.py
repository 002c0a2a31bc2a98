from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from blog_api.schemas.user import UserResponse


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    user_id: UUID
    jti: str
    token_type: str


class LoginResponse(BaseModel):
    """Login payload: the token plus the authenticated user."""

    model_config = ConfigDict(populate_by_name=True)

    token: Token
    user: UserResponse = Field(...)
