"""
Blog Routes.

CRUD, publishing and listing endpoints for blogs.

Summary
-------
Endpoints include:
  - Create blog (draft)
  - List published blogs (search, sort, paginate)
  - List the caller's own blogs
  - Get blog by id (counts the read)
  - Update blog
  - Delete blog
  - Change blog state

Dependencies
------------
  - `BlogServiceDep`: Blog service bound to the request's database session.
  - `SubjectDep`: The caller's user id, or None when anonymous.

Every response uses the `{statusCode, data, success}` envelope.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import ORJSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from blog_api.auth import RequiredSubjectDep, SubjectDep
from blog_api.db import get_session
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.schemas import (
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogStateUpdate,
    ErrorEnvelope,
    OwnerListQuery,
    PublicListQuery,
    SuccessEnvelope,
    success_response,
)
from blog_api.services import BlogService

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

BLOG_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Getting Started with Async Python",
    "description": "A gentle tour of asyncio for web developers",
    "body": "Async Python lets a single process juggle thousands of connections...",
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "email": "johndoe@gmail.com",
        "firstName": "John",
        "lastName": "Doe",
    },
    "state": "draft",
    "read_count": 0,
    "reading_time": 1,
    "tags": ["python", "asyncio"],
    "createdAt": "2025-01-01T10:00:00+00:00",
    "updatedAt": "2025-01-01T10:00:00+00:00",
}


def error_example(status_code: int, description: str, error: str) -> dict[str, Any]:
    return {
        "model": ErrorEnvelope,
        "description": description,
        "content": {
            "application/json": {
                "example": {"statusCode": status_code, "error": error, "success": False},
            },
        },
    }


UNAUTHORIZED = error_example(401, "Not authenticated", "Unauthorized")
NOT_FOUND = error_example(404, "Not found", "Blog not found")
INVALID_ID = error_example(400, "Bad request", "Invalid blog ID")


def get_blog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BlogService:
    """
    Resolve the `BlogService` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogService
        Service bound to repositories sharing the session.
    """
    return BlogService(BlogRepository(session), UserRepository(session))


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


def get_public_list_query(
    page: Annotated[str | None, Query(description="Page number (default 1)")] = None,
    limit: Annotated[str | None, Query(description="Page size, 1-100 (default 20)")] = None,
    search: Annotated[
        str | None,
        Query(description="Matches title, description, tags or author name"),
    ] = None,
    sort_by: Annotated[
        str | None,
        Query(alias="sortBy", description="createdAt, read_count or reading_time"),
    ] = None,
    order: Annotated[str | None, Query(description="asc or desc (default desc)")] = None,
) -> PublicListQuery:
    """
    Dependency to construct `PublicListQuery` from query parameters.

    Values are normalized rather than rejected: unknown sort fields and
    out-of-range paging fall back to their defaults.
    """
    return PublicListQuery.from_params(
        page=page,
        limit=limit,
        search=search,
        sort_by=sort_by,
        order=order,
    )


def get_owner_list_query(
    page: Annotated[str | None, Query(description="Page number (default 1)")] = None,
    limit: Annotated[str | None, Query(description="Page size, 1-100 (default 20)")] = None,
    state: Annotated[str | None, Query(description="draft or published")] = None,
) -> OwnerListQuery:
    """Dependency to construct `OwnerListQuery` from query parameters."""
    return OwnerListQuery.from_params(page=page, limit=limit, state=state)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogResponse],
    status_code=HTTP_201_CREATED,
    summary="Create a new blog",
    description="Create a draft blog owned by the caller.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {"statusCode": 201, "data": BLOG_EXAMPLE, "success": True},
                },
            },
        },
        400: error_example(400, "Bad request", "Blog with this title already exists"),
        401: UNAUTHORIZED,
    },
    operation_id="blogs_create",
)
async def create_blog(
    subject: RequiredSubjectDep,
    blog: BlogCreate,
    service: BlogServiceDep,
) -> ORJSONResponse:
    """
    Create a new blog.

    Parameters
    ----------
    subject : UUID
        Authenticated caller.
    blog : BlogCreate
        Validated blog payload.
    service : BlogService
        Service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with the created blog.
    """
    created = await service.create(subject, blog)
    return success_response(created, HTTP_201_CREATED)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogPage],
    summary="List published blogs",
    description="Paginated list of published blogs with optional search and sorting.",
    operation_id="blogs_list",
)
async def list_blogs(
    query: Annotated[PublicListQuery, Depends(get_public_list_query)],
    service: BlogServiceDep,
) -> ORJSONResponse:
    """
    List published blogs.

    Parameters
    ----------
    query : PublicListQuery
        Normalized paging, search and sort options.
    service : BlogService
        Service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with `items` and `pagination`.
    """
    return success_response(await service.list_published(query))


@router.get(
    "/user/my-blogs",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogPage],
    summary="List my blogs",
    description="Paginated list of the caller's blogs, newest first.",
    responses={401: UNAUTHORIZED},
    operation_id="blogs_list_mine",
)
async def list_my_blogs(
    subject: RequiredSubjectDep,
    query: Annotated[OwnerListQuery, Depends(get_owner_list_query)],
    service: BlogServiceDep,
) -> ORJSONResponse:
    """List the caller's own blogs, drafts included."""
    return success_response(await service.list_mine(subject, query))


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogResponse],
    summary="Get blog by ID",
    description=(
        "Retrieve a blog by its UUID and count the read. "
        "Drafts are only visible to their author."
    ),
    responses={400: INVALID_ID, 404: NOT_FOUND},
    operation_id="blogs_get_by_id",
)
async def get_blog(
    blog_id: str,
    subject: SubjectDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    """
    Get blog by ID and increment its read count.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    subject : UUID | None
        Caller identity, None when anonymous.
    service : BlogService
        Service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with the blog.
    """
    return success_response(await service.read(subject, blog_id))


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogResponse],
    summary="Update blog",
    description="Update title, description, body or tags of one of your blogs.",
    responses={
        400: INVALID_ID,
        401: UNAUTHORIZED,
        403: error_example(403, "Forbidden", "You can only edit your own blogs"),
        404: NOT_FOUND,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: str,
    subject: RequiredSubjectDep,
    service: BlogServiceDep,
    payload: Annotated[
        dict[str, Any] | None,
        Body(
            examples=[{"title": "Getting Started with Async Python (2nd edition)"}],
        ),
    ] = None,
) -> ORJSONResponse:
    """
    Update a blog.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    subject : UUID
        Authenticated caller.
    service : BlogService
        Service dependency.
    payload : dict | None
        Fields to change, validated once ownership is confirmed.

    Returns
    -------
    ORJSONResponse
        Envelope with the updated blog.
    """
    return success_response(await service.update(subject, blog_id, payload))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    summary="Delete blog",
    description="Permanently delete one of your blogs.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "statusCode": 200,
                        "data": {"message": "Blog deleted successfully"},
                        "success": True,
                    },
                },
            },
        },
        400: INVALID_ID,
        401: UNAUTHORIZED,
        403: error_example(403, "Forbidden", "You can only delete your own blogs"),
        404: NOT_FOUND,
    },
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: str,
    subject: RequiredSubjectDep,
    service: BlogServiceDep,
) -> ORJSONResponse:
    """Delete a blog by ID."""
    await service.delete(subject, blog_id)
    return success_response({"message": "Blog deleted successfully"})


@router.patch(
    "/{blog_id}/state",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[BlogResponse],
    summary="Change blog state",
    description="Publish or unpublish one of your blogs.",
    responses={
        400: error_example(400, "Bad request", "State must be 'draft' or 'published'"),
        401: UNAUTHORIZED,
        403: error_example(403, "Forbidden", "You can only change state of your own blogs"),
        404: NOT_FOUND,
    },
    operation_id="blogs_change_state",
)
async def change_blog_state(
    blog_id: str,
    subject: RequiredSubjectDep,
    service: BlogServiceDep,
    payload: BlogStateUpdate | None = None,
) -> ORJSONResponse:
    """
    Change the state of a blog.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    subject : UUID
        Authenticated caller.
    service : BlogService
        Service dependency.
    payload : BlogStateUpdate | None
        Requested state.

    Returns
    -------
    ORJSONResponse
        Envelope with the updated blog.
    """
    state = payload.state if payload else None
    return success_response(await service.change_state(subject, blog_id, state))
