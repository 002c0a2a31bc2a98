"""Repository layer for database operations."""

from blog_api.repositories.blog import BlogRepository
from blog_api.repositories.user import UserRepository

__all__ = ["BlogRepository", "UserRepository"]
