"""
Account provisioning used by the ``manage_users`` script.

Passwords are stored as bcrypt hashes; every account also gets a random
32 character ``auth_key``.
"""
import logging
import secrets
import string
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash
from app.models.user import User, UserStatus


logger = logging.getLogger(__name__)

_AUTH_KEY_ALPHABET = string.ascii_letters + string.digits


class UserServiceError(Exception):
    """Raised when an account operation cannot be applied."""
    pass


def generate_auth_key(length: int = 32) -> str:
    return "".join(secrets.choice(_AUTH_KEY_ALPHABET) for _ in range(length))


class UserService:
    """Create, list and maintain back-office accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        username: str,
        email: str,
        password: str,
        status: int = UserStatus.ACTIVE,
    ) -> User:
        """
        Create a new account.

        Raises:
            UserServiceError: if the username or email is already taken
        """
        result = await self.db.execute(
            select(User).where(or_(User.username == username, User.email == email))
        )
        if result.scalars().first() is not None:
            raise UserServiceError(f"User '{username}' or email '{email}' already exists")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            auth_key=generate_auth_key(),
            status=int(status),
        )
        self.db.add(user)
        await self.db.flush()
        logger.info(f"Created user {username} (id={user.id})")
        return user

    async def set_password(self, username: str, password: str) -> User:
        user = await self._require(username)
        user.password_hash = get_password_hash(password)
        await self.db.flush()
        logger.info(f"Password updated for user {username}")
        return user

    async def set_status(self, username: str, status: UserStatus) -> User:
        user = await self._require(username)
        user.status = int(status)
        await self.db.flush()
        logger.info(f"User {username} status set to {status.name}")
        return user

    async def activate(self, username: str) -> User:
        return await self.set_status(username, UserStatus.ACTIVE)

    async def deactivate(self, username: str) -> User:
        return await self.set_status(username, UserStatus.INACTIVE)

    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def _require(self, username: str) -> User:
        user = await self.get_by_username(username)
        if user is None:
            raise UserServiceError(f"User '{username}' not found")
        return user
