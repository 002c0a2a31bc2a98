"""Tests for listing predicates."""

from uuid import uuid4

from sqlalchemy.dialects import sqlite

from blog_api.repositories.filters import escape_like, matches_search, sort_order


def compile_sql(clause: object) -> str:
    return str(clause.compile(dialect=sqlite.dialect()))  # type: ignore[attr-defined]


class TestEscapeLike:
    """Test cases for LIKE escaping."""

    def test_wildcards_escaped(self) -> None:
        """% and _ match literally."""
        assert escape_like("100%_done") == "100\\%\\_done"

    def test_escape_char_escaped(self) -> None:
        """The escape character itself is doubled."""
        assert escape_like("a\\b") == "a\\\\b"

    def test_plain_text_unchanged(self) -> None:
        """Ordinary text passes through."""
        assert escape_like("python") == "python"


class TestMatchesSearch:
    """Test cases for the search predicate."""

    def test_searches_text_fields_and_tags(self) -> None:
        """Title, description and tags are OR-ed together."""
        sql = compile_sql(matches_search("py"))
        assert "blogs.title" in sql
        assert "blogs.description" in sql
        assert "blogs.tags" in sql
        assert " OR " in sql

    def test_tags_matched_one_by_one(self) -> None:
        """Each tag is searched on its own, not the stored JSON text."""
        sql = compile_sql(matches_search("py"))
        assert "EXISTS (SELECT 1" in sql
        assert "json_each(blogs.tags)" in sql
        assert "CAST(blogs.tags" not in sql

    def test_author_ids_included(self) -> None:
        """Authors matched by name are part of the disjunction."""
        sql = compile_sql(matches_search("py", [uuid4(), uuid4()]))
        assert "blogs.author_id IN" in sql


class TestSortOrder:
    """Test cases for ORDER BY construction."""

    def test_id_tiebreaker(self) -> None:
        """Sorting always ends with the id in the same direction."""
        primary, tiebreaker = sort_order("read_count", "asc")
        assert compile_sql(primary) == "blogs.read_count ASC"
        assert compile_sql(tiebreaker) == "blogs.id ASC"

    def test_unknown_field_uses_created_at(self) -> None:
        """Unknown sort names fall back to creation time."""
        primary, _ = sort_order("nope", "desc")
        assert compile_sql(primary) == "blogs.created_at DESC"
