"""Tests for blog endpoints."""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from blog_api.configs import settings
from blog_api.managers.token_manager import create_access_token
from blog_api.models import UserDB

type PayloadFactory = Callable[..., dict[str, Any]]


async def create_blog(
    client: AsyncClient,
    headers: dict[str, str],
    payload: dict[str, Any],
) -> dict[str, Any]:
    response = await client.post("/blogs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def publish(client: AsyncClient, headers: dict[str, str], blog_id: str) -> None:
    response = await client.patch(
        f"/blogs/{blog_id}/state",
        json={"state": "published"},
        headers=headers,
    )
    assert response.status_code == 200, response.text


class TestCreateBlog:
    """Test cases for POST /blogs."""

    @pytest.mark.asyncio
    async def test_create(
        self,
        client: AsyncClient,
        author: UserDB,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """A new blog is a draft owned by the caller, wrapped in the envelope."""
        response = await client.post("/blogs", json=blog_payload(), headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["statusCode"] == 201
        assert body["success"] is True
        data = body["data"]
        assert data["state"] == "draft"
        assert data["read_count"] == 0
        assert data["reading_time"] == 1
        assert data["author"]["id"] == str(author.uuid)
        assert data["author"]["firstName"] == "Ada"
        assert "password_hash" not in data["author"]

    @pytest.mark.asyncio
    async def test_anonymous(self, client: AsyncClient, blog_payload: PayloadFactory) -> None:
        """Creating without credentials is rejected before the body is checked."""
        response = await client.post("/blogs", json={"title": "x"})

        assert response.status_code == 401
        assert response.json() == {"statusCode": 401, "error": "Unauthorized", "success": False}

    @pytest.mark.asyncio
    async def test_deleted_author(
        self,
        client: AsyncClient,
        headers_for: Callable[..., dict[str, str]],
        blog_payload: PayloadFactory,
    ) -> None:
        """A valid token for a user that no longer exists cannot create blogs."""
        response = await client.post("/blogs", json=blog_payload(), headers=headers_for(uuid4()))

        assert response.status_code == 401
        assert response.json() == {
            "statusCode": 401,
            "error": "User not found",
            "success": False,
        }

    @pytest.mark.asyncio
    async def test_cookie_credential(
        self,
        client: AsyncClient,
        author: UserDB,
        blog_payload: PayloadFactory,
    ) -> None:
        """The auth cookie works in place of a bearer header."""
        token = create_access_token(user_id=author.uuid)
        response = await client.post(
            "/blogs",
            json=blog_payload(),
            headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"},
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_client_cannot_set_system_fields(
        self,
        client: AsyncClient,
        author: UserDB,
        other_user: UserDB,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """State, counters and author in the body are ignored."""
        data = await create_blog(
            client,
            auth_headers,
            blog_payload(
                state="published",
                read_count=99,
                author_id=str(other_user.uuid),
                authorId=str(other_user.uuid),
            ),
        )

        assert data["state"] == "draft"
        assert data["read_count"] == 0
        assert data["author"]["id"] == str(author.uuid)
        assert "authorId" not in data

    @pytest.mark.parametrize(
        ("title", "status_code"),
        [("abcd", 400), ("abcde", 201), ("t" * 200, 201), ("t" * 201, 400)],
    )
    @pytest.mark.asyncio
    async def test_title_length_bounds(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
        title: str,
        status_code: int,
    ) -> None:
        response = await client.post("/blogs", json=blog_payload(title=title), headers=auth_headers)

        assert response.status_code == status_code
        if status_code == 400:
            assert response.json()["error"] == "Title must be between 5 and 200 characters"

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.post("/blogs", json={"title": "Only a title"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Title, description, and body are required"

    @pytest.mark.asyncio
    async def test_duplicate_title(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """Titles are unique across all authors."""
        await create_blog(client, auth_headers, blog_payload(title="Taken title"))
        response = await client.post(
            "/blogs",
            json=blog_payload(title="Taken title"),
            headers=other_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Blog with this title already exists"


class TestGetBlog:
    """Test cases for GET /blogs/{id}."""

    @pytest.mark.asyncio
    async def test_published_read_counts(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """Every successful read increments the counter."""
        blog = await create_blog(client, auth_headers, blog_payload())
        await publish(client, auth_headers, blog["id"])

        first = await client.get(f"/blogs/{blog['id']}")
        second = await client.get(f"/blogs/{blog['id']}")

        assert first.status_code == 200
        assert first.json()["data"]["read_count"] == 1
        assert second.json()["data"]["read_count"] == 2

    @pytest.mark.asyncio
    async def test_draft_hidden_from_others(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """Drafts look missing to everyone but the author and are not counted."""
        blog = await create_blog(client, auth_headers, blog_payload())

        anonymous = await client.get(f"/blogs/{blog['id']}")
        other = await client.get(f"/blogs/{blog['id']}", headers=other_headers)
        assert anonymous.status_code == 404
        assert other.status_code == 404
        assert other.json()["error"] == "Blog not found"

        owner = await client.get(f"/blogs/{blog['id']}", headers=auth_headers)
        assert owner.status_code == 200
        assert owner.json()["data"]["read_count"] == 1

    @pytest.mark.asyncio
    async def test_invalid_token_reads_as_anonymous(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """A bad token on a public read is ignored rather than rejected."""
        blog = await create_blog(client, auth_headers, blog_payload())
        await publish(client, auth_headers, blog["id"])

        response = await client.get(
            f"/blogs/{blog['id']}",
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_id(self, client: AsyncClient) -> None:
        response = await client.get("/blogs/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid blog ID"

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient) -> None:
        response = await client.get(f"/blogs/{uuid4()}")
        assert response.status_code == 404


class TestUpdateBlog:
    """Test cases for PUT /blogs/{id}."""

    @pytest.mark.asyncio
    async def test_partial_update(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """Only the given fields change and reading time follows the body."""
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.put(
            f"/blogs/{blog['id']}",
            json={"body": "word " * 401, "state": "published"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["reading_time"] == 3
        assert data["title"] == blog["title"]
        assert data["state"] == "draft"

    @pytest.mark.asyncio
    async def test_non_owner_forbidden_before_validation(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """A non-owner gets 403 even when the payload is invalid."""
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.put(
            f"/blogs/{blog['id']}",
            json={"title": "abc"},
            headers=other_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You can only edit your own blogs"

    @pytest.mark.asyncio
    async def test_invalid_field(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.put(
            f"/blogs/{blog['id']}",
            json={"description": "short"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Description must be between 10 and 500 characters"

    @pytest.mark.asyncio
    async def test_anonymous(self, client: AsyncClient) -> None:
        response = await client.put(f"/blogs/{uuid4()}", json={"title": "Whatever title"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.put(
            f"/blogs/{uuid4()}",
            json={"title": "Whatever title"},
            headers=auth_headers,
        )
        assert response.status_code == 404


class TestDeleteBlog:
    """Test cases for DELETE /blogs/{id}."""

    @pytest.mark.asyncio
    async def test_delete(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.delete(f"/blogs/{blog['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "statusCode": 200,
            "data": {"message": "Blog deleted successfully"},
            "success": True,
        }
        missing = await client.get(f"/blogs/{blog['id']}", headers=auth_headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_non_owner(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.delete(f"/blogs/{blog['id']}", headers=other_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "You can only delete your own blogs"

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.delete(f"/blogs/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404


class TestChangeState:
    """Test cases for PATCH /blogs/{id}/state."""

    @pytest.mark.asyncio
    async def test_publish_and_unpublish(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        blog = await create_blog(client, auth_headers, blog_payload())

        for state in ("published", "draft"):
            response = await client.patch(
                f"/blogs/{blog['id']}/state",
                json={"state": state},
                headers=auth_headers,
            )
            assert response.status_code == 200
            assert response.json()["data"]["state"] == state

    @pytest.mark.asyncio
    async def test_bad_state_checked_before_ownership(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """An unknown state is a 400 even for a non-owner."""
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.patch(
            f"/blogs/{blog['id']}/state",
            json={"state": "archived"},
            headers=other_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "State must be 'draft' or 'published'"

    @pytest.mark.asyncio
    async def test_non_owner(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        blog = await create_blog(client, auth_headers, blog_payload())

        response = await client.patch(
            f"/blogs/{blog['id']}/state",
            json={"state": "published"},
            headers=other_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You can only change state of your own blogs"

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.patch(
            f"/blogs/{uuid4()}/state",
            json={"state": "published"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_anonymous(self, client: AsyncClient) -> None:
        response = await client.patch(f"/blogs/{uuid4()}/state", json={"state": "published"})
        assert response.status_code == 401


class TestListBlogs:
    """Test cases for GET /blogs."""

    @pytest.mark.asyncio
    async def test_only_published_with_pagination(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        await create_blog(client, auth_headers, blog_payload())
        for _ in range(3):
            blog = await create_blog(client, auth_headers, blog_payload())
            await publish(client, auth_headers, blog["id"])

        response = await client.get("/blogs", params={"limit": "2"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["items"]) == 2
        assert all(item["state"] == "published" for item in data["items"])
        assert data["items"][0]["author"]["lastName"] == "Lovelace"
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalBlogs": 3,
            "blogsPerPage": 2,
        }

    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient) -> None:
        response = await client.get("/blogs")

        data = response.json()["data"]
        assert data["items"] == []
        assert data["pagination"]["totalPages"] == 0

    @pytest.mark.asyncio
    async def test_search_and_sort(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        """Search narrows the list and sortBy orders it."""
        short = await create_blog(client, auth_headers, blog_payload(tags=["Django"]))
        long = await create_blog(
            client,
            auth_headers,
            blog_payload(body="word " * 900, tags=["django"]),
        )
        unrelated = await create_blog(client, auth_headers, blog_payload(tags=["rust"]))
        for blog in (short, long, unrelated):
            await publish(client, auth_headers, blog["id"])

        response = await client.get(
            "/blogs",
            params={"search": "DJANGO", "sortBy": "reading_time", "order": "asc"},
        )

        ids = [item["id"] for item in response.json()["data"]["items"]]
        assert ids == [short["id"], long["id"]]

    @pytest.mark.asyncio
    async def test_search_by_author_name(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        mine = await create_blog(client, auth_headers, blog_payload())
        theirs = await create_blog(client, other_headers, blog_payload())
        await publish(client, auth_headers, mine["id"])
        await publish(client, other_headers, theirs["id"])

        response = await client.get("/blogs", params={"search": "hopper"})

        ids = [item["id"] for item in response.json()["data"]["items"]]
        assert ids == [theirs["id"]]

    @pytest.mark.asyncio
    async def test_junk_paging_falls_back(self, client: AsyncClient) -> None:
        """Unparseable paging values use the defaults instead of failing."""
        response = await client.get("/blogs", params={"page": "abc", "limit": "1000"})

        assert response.status_code == 200
        pagination = response.json()["data"]["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["blogsPerPage"] == 100

    @pytest.mark.asyncio
    async def test_huge_page_is_clamped(self, client: AsyncClient) -> None:
        """A page number past any real offset is clamped, not a server error."""
        response = await client.get("/blogs", params={"page": "99999999999999999999"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["items"] == []
        assert data["pagination"]["currentPage"] == 1_000_000


class TestListMyBlogs:
    """Test cases for GET /blogs/user/my-blogs."""

    @pytest.mark.asyncio
    async def test_own_blogs_with_state_filter(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
        blog_payload: PayloadFactory,
    ) -> None:
        draft = await create_blog(client, auth_headers, blog_payload())
        published = await create_blog(client, auth_headers, blog_payload())
        await publish(client, auth_headers, published["id"])
        await create_blog(client, other_headers, blog_payload())

        everything = await client.get("/blogs/user/my-blogs", headers=auth_headers)
        drafts = await client.get(
            "/blogs/user/my-blogs",
            params={"state": "draft"},
            headers=auth_headers,
        )

        assert everything.json()["data"]["pagination"]["totalBlogs"] == 2
        assert [item["id"] for item in drafts.json()["data"]["items"]] == [draft["id"]]

    @pytest.mark.asyncio
    async def test_anonymous(self, client: AsyncClient) -> None:
        response = await client.get("/blogs/user/my-blogs")
        assert response.status_code == 401
