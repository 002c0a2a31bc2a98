"""
Reusable WHERE/ORDER BY fragments for blog listings.

Search text is matched as a literal, case-insensitive substring: `%` and
`_` typed by a caller never act as wildcards.
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import asc, desc, exists, false, func, or_, select
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression
from sqlalchemy.sql.selectable import TableValuedAlias

from blog_api.configs.settings import settings
from blog_api.models import BlogDB

LIKE_ESCAPE = "\\"

# Public sort names mapped onto columns
SORT_COLUMNS = {
    "createdAt": BlogDB.created_at,
    "read_count": BlogDB.read_count,
    "reading_time": BlogDB.reading_time,
}


def escape_like(text: str) -> str:
    """
    Escape LIKE metacharacters so the text matches literally.

    Examples:
    --------
    >>> escape_like("100%_done")
    '100\\\\%\\\\_done'
    """
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def contains(column: ColumnElement, text: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on a column."""
    return column.ilike(f"%{escape_like(text)}%", escape=LIKE_ESCAPE)


def state_is(state: str) -> ColumnElement[bool]:
    return BlogDB.state == state


def authored_by(author_id: UUID) -> ColumnElement[bool]:
    return BlogDB.author_id == author_id


def authored_by_any(author_ids: Iterable[UUID]) -> ColumnElement[bool]:
    ids = list(author_ids)
    return BlogDB.author_id.in_(ids) if ids else false()


def tag_values() -> TableValuedAlias:
    """One row per tag of the current blog, exposed as a `value` column."""
    if settings.is_sqlite:
        return func.json_each(BlogDB.tags).table_valued("value")
    return func.jsonb_array_elements_text(BlogDB.tags).table_valued("value")


def any_tag_contains(text: str) -> ColumnElement[bool]:
    """Match blogs with at least one tag containing `text`."""
    tags = tag_values()
    return exists(select(1).select_from(tags).where(contains(tags.c.value, text)))


def matches_search(text: str, author_ids: Iterable[UUID] = ()) -> ColumnElement[bool]:
    """
    Match blogs whose title, description or any tag contains `text`, or
    whose author is one of `author_ids` (authors matched by name).

    Tags are matched one by one, never as their stored JSON text.
    """
    return or_(
        contains(BlogDB.title, text),
        contains(BlogDB.description, text),
        any_tag_contains(text),
        authored_by_any(author_ids),
    )


def sort_order(sort_by: str, order: str) -> tuple[UnaryExpression, UnaryExpression]:
    """
    Build ORDER BY clauses for a listing.

    The id tiebreaker keeps pages stable when many rows share a sort key.
    """
    direction = asc if order == "asc" else desc
    column = SORT_COLUMNS.get(sort_by, BlogDB.created_at)
    return direction(column), direction(BlogDB.id)
