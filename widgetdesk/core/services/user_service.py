"""User service module."""

from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ...schemas.auth import AuthResult
from ..database import User
from ..dependencies import register_service
from ..repository.user_repository import UserRepository
from ..security import get_password_hash, verify_password
from .base import BaseService
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ServiceError,
    ValidationError,
)

MISSING_CREDENTIALS = "Email and password are required"
INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_EXISTS = "An account with this email already exists"
SIGN_UP_SUCCESS = "Account created. You can now sign in."


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


@register_service
class UserService(BaseService[User]):
    """Sign-up, sign-in and lookup of users."""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.repo = UserRepository(db)

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.repo.get_by_id(user_id)

    async def register(self, email: str, password: str) -> User:
        """Create an account.

        Raises:
            ValidationError: If email or password is missing
            ConflictError: If the email is taken
            DatabaseError: If the user cannot be stored
        """
        email = _normalize_email(email)
        if not email or not password:
            raise ValidationError(MISSING_CREDENTIALS)
        if await self.repo.get_by_email(email) is not None:
            raise ConflictError(ACCOUNT_EXISTS)

        async with self.write("create account"):
            user = await self.repo.create(
                {"email": email, "password_hash": get_password_hash(password)}
            )
        logger.info(f"Created user {user.id} ({email})")
        return user

    async def sign_up(self, email: str, password: str) -> AuthResult:
        """Like ``register``, but the outcome is a message for the sign-up form."""
        try:
            await self.register(email, password)
        except ServiceError as e:
            return AuthResult(error=e.message)
        return AuthResult(success=SIGN_UP_SUCCESS)

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and record the sign-in.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match a user
            AuthorizationError: If the account is disabled
        """
        email = _normalize_email(email)
        if not email or not password:
            raise ValidationError(MISSING_CREDENTIALS)

        user = await self.repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed sign-in attempt for {email}")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthorizationError("Account is disabled")

        async with self.write("record sign-in"):
            return await self.repo.update_last_sign_in(user)
