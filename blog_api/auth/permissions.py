"""
Ownership-based access rules for blogs.

`can_perform` is a pure decision: it never raises and never touches the
database. Callers turn a denial into 404 (view) or 403 (everything else).
"""

from enum import StrEnum
from uuid import UUID

from blog_api.models import BlogDB


class BlogAction(StrEnum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    CHANGE_STATE = "change_state"


def is_owner(subject: UUID | None, blog: BlogDB) -> bool:
    """Whether the subject authored the blog; anonymous never owns anything."""
    return subject is not None and subject == blog.author_id


def can_perform(subject: UUID | None, blog: BlogDB, action: BlogAction) -> bool:
    """
    Decide whether `subject` may perform `action` on `blog`.

    Published blogs are visible to everyone, drafts only to their author.
    Edit, delete and state changes are reserved for the author.

    Args:
        subject: Resolved caller id, or None for anonymous
        blog: Blog being acted on
        action: Requested action

    Returns:
        bool: True if allowed
    """
    if action is BlogAction.VIEW and blog.state == "published":
        return True
    return is_owner(subject, blog)
