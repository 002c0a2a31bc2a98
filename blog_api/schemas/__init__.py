from blog_api.schemas.auth import LoginResponse, Token, TokenData
from blog_api.schemas.blog import (
    BLOG_STATES,
    AuthorResponse,
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogStateUpdate,
    BlogUpdate,
    OwnerListQuery,
    PageQuery,
    Pagination,
    PublicListQuery,
)
from blog_api.schemas.envelope import ErrorEnvelope, SuccessEnvelope, success_response
from blog_api.schemas.user import UserCreate, UserLogin, UserResponse

__all__ = [
    "AuthorResponse",
    "BLOG_STATES",
    "BlogCreate",
    "BlogPage",
    "BlogResponse",
    "BlogStateUpdate",
    "BlogUpdate",
    "ErrorEnvelope",
    "LoginResponse",
    "OwnerListQuery",
    "PageQuery",
    "Pagination",
    "PublicListQuery",
    "SuccessEnvelope",
    "Token",
    "TokenData",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "success_response",
]
