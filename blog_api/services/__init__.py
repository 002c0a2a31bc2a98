from blog_api.services.auth import AuthService
from blog_api.services.blog import BlogService, parse_blog_id

__all__ = ["AuthService", "BlogService", "parse_blog_id"]
