"""
Password hashing using Argon2id through passlib's CryptContext.

Hashing is CPU-bound, so the module-level helpers run it in a thread
pool to keep the event loop responsive.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from blog_api.configs import CONFIG_MAP, settings
from blog_api.decorators.with_retry import with_retry
from blog_api.errors import PasswordHashingError
from blog_api.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Argon2id password hasher.

    Cost parameters come from `PASSWORD_SECURITY_LEVEL` (see `CONFIG_MAP`).
    """

    def __init__(self) -> None:
        self.level = settings.PASSWORD_SECURITY_LEVEL
        params = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If the backend fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a stored hash.

        Malformed hashes verify as False rather than raising.

        Example:
            >>> hasher = PasswordHasher()
            >>> hashed = hasher.hash("my_password")
            >>> hasher.verify("my_password", hashed)
            True
            >>> hasher.verify("wrong_password", hashed)
            False
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def dummy_verify(self) -> None:
        """Spend verification time without a stored hash (unknown users)."""
        self.pwd_context.dummy_verify()


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Return the process-wide hasher, creating it on first use."""
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


@with_retry(PasswordHashingError, base_delay=1, max_delay=10)
async def hash_password(password: str) -> str:
    """
    Hash a password with the default hasher.

    Example:
        >>> hashed = await hash_password("my_password")
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str | None) -> bool:
    """
    Verify a password with the default hasher.

    A missing hash still costs one verification so unknown e-mails and
    wrong passwords take the same time.
    """
    hasher = get_password_hasher()
    if hashed_password is None:
        await get_running_loop().run_in_executor(executor, hasher.dummy_verify)
        return False
    return await get_running_loop().run_in_executor(
        executor,
        hasher.verify,
        password,
        hashed_password,
    )
