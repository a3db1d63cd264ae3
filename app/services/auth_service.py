from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.core.security import verify_password, create_access_token
from app.config import settings


class AuthService:
    """Authentication service for user login and token management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate_user(
        self,
        username: str,
        password: str
    ) -> Optional[User]:
        """
        Authenticate a user by username and password.

        Args:
            username: Account username (exact match)
            password: Plain text password

        Returns:
            User object if authentication successful, None otherwise
        """
        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        user = result.scalar_one_or_none()

        if user is None:
            return None

        if not verify_password(password, user.password_hash):
            return None

        if not user.is_active:
            return None

        return user

    def create_token(self, user: User) -> Tuple[str, int]:
        """
        Create an access token for a user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = create_access_token(
            subject=user.id,
            extra_claims={"username": user.username, "email": user.email},
        )
        expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        return access_token, expires_in
