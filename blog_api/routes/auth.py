"""
Authentication routes: signup, login, logout and profile.

Login returns the access token in the body and also stores it in the
auth cookie, so browsers and API clients can use either credential.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from blog_api.auth import RequiredSubjectDep
from blog_api.configs import settings
from blog_api.db import get_session
from blog_api.repositories import UserRepository
from blog_api.routes.blog import UNAUTHORIZED, error_example
from blog_api.schemas import (
    LoginResponse,
    SuccessEnvelope,
    UserCreate,
    UserLogin,
    UserResponse,
    success_response,
)
from blog_api.services import AuthService

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuthService:
    """Resolve the `AuthService` dependency for the request's session."""
    return AuthService(UserRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def set_auth_cookie(response: ORJSONResponse, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[LoginResponse],
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and sign it in.",
    responses={
        400: error_example(400, "Bad request", "Email already registered"),
    },
    operation_id="auth_signup",
)
async def signup(user: UserCreate, auth_service: AuthServiceDep) -> ORJSONResponse:
    """
    Register a new user.

    Parameters
    ----------
    user : UserCreate
        Signup payload.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with the token and the new user; the auth cookie is set.
    """
    db_user = await auth_service.register(user)
    token = auth_service.create_token_for_user(db_user)
    response = success_response(
        LoginResponse(token=token, user=UserResponse.from_db(db_user)),
        HTTP_201_CREATED,
    )
    set_auth_cookie(response, token.access_token)
    return response


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[LoginResponse],
    summary="Login for access token",
    description="Authenticate with email and password to obtain an access token.",
    responses={
        401: error_example(401, "Unauthorized", "Invalid email or password"),
    },
    operation_id="auth_login",
)
async def login(credentials: UserLogin, auth_service: AuthServiceDep) -> ORJSONResponse:
    """
    Login with email and password.

    Parameters
    ----------
    credentials : UserLogin
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    ORJSONResponse
        Envelope with the token and the user; the auth cookie is set.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    """
    user = await auth_service.authenticate_user(credentials)
    token = auth_service.create_token_for_user(user)
    response = success_response(LoginResponse(token=token, user=UserResponse.from_db(user)))
    set_auth_cookie(response, token.access_token)
    return response


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    summary="Logout",
    description="Clear the auth cookie.",
    operation_id="auth_logout",
)
async def logout() -> ORJSONResponse:
    """Clear the auth cookie; bearer tokens stay valid until they expire."""
    response = success_response({"message": "Logged out successfully"})
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    response_model=SuccessEnvelope[UserResponse],
    summary="Get current user",
    responses={401: UNAUTHORIZED},
    operation_id="auth_profile",
)
async def profile(subject: RequiredSubjectDep, auth_service: AuthServiceDep) -> ORJSONResponse:
    """Return the authenticated user's account."""
    user = await auth_service.get_profile(subject)
    return success_response(UserResponse.from_db(user))
