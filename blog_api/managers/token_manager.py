"""Token manager for signing and checking JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import JWTError, jwt

from blog_api.configs import settings
from blog_api.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Create a new access token for a user.

    Args:
        user_id: User's UUID, stored in the `sub` claim
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Signature, expiry, issuer and audience are all checked.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    subject: str | None = payload.get("sub")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not subject or not jti or token_type != ACCESS_TOKEN_TYPE:
        return None

    try:
        user_id = UUID(subject)
    except ValueError:
        return None

    return TokenData(user_id=user_id, jti=jti, token_type=token_type)
