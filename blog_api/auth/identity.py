"""
Caller identity resolution.

A request carries its credential either as `Authorization: Bearer <jwt>`
or in the auth cookie. Resolution never fails: a missing, malformed or
expired token simply yields an anonymous subject (None). Operations that
need a caller call `require_subject`.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from blog_api.configs import settings
from blog_api.errors import UnauthorizedError
from blog_api.managers.token_manager import decode_access_token
from blog_api.monitoring import set_user_id

type Subject = UUID | None

BEARER_PREFIX = "bearer "


def extract_credential(request: Request) -> str | None:
    """Return the raw token from the bearer header, else from the auth cookie."""
    authorization = request.headers.get("Authorization", "")
    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
        if token:
            return token

    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


def resolve_subject(token: str | None) -> Subject:
    """Map a credential to the caller's user id, or None when it does not verify."""
    if not token:
        return None
    token_data = decode_access_token(token)
    return token_data.user_id if token_data else None


def require_subject(subject: Subject) -> UUID:
    """
    Return the subject, rejecting anonymous callers.

    Raises:
        UnauthorizedError: If the caller is anonymous
    """
    if subject is None:
        raise UnauthorizedError
    return subject


async def get_subject(request: Request) -> Subject:
    """FastAPI dependency resolving the caller (None when anonymous)."""
    subject = resolve_subject(extract_credential(request))
    if subject is not None:
        set_user_id(str(subject))
    return subject


async def get_required_subject(
    subject: Annotated[Subject, Depends(get_subject)],
) -> UUID:
    """FastAPI dependency for routes that reject anonymous callers with 401."""
    return require_subject(subject)


SubjectDep = Annotated[Subject, Depends(get_subject)]
RequiredSubjectDep = Annotated[UUID, Depends(get_required_subject)]
