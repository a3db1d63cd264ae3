from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _epoch_now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


class UserStatus(IntEnum):
    """Account status codes stored in ``users.status``."""
    INACTIVE = 0
    ACTIVE = 10


class User(Base):
    """
    Back-office user allowed to sign in to the admin API.
    Timestamps are epoch seconds.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    auth_key: Mapped[str] = mapped_column(String(32), nullable=False)
    password_reset_token: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[int] = mapped_column(
        Integer,
        default=UserStatus.ACTIVE,
        nullable=False,
        comment="10 = active, 0 = inactive"
    )

    created_at: Mapped[int] = mapped_column(Integer, default=_epoch_now, nullable=False)
    updated_at: Mapped[int] = mapped_column(
        Integer,
        default=_epoch_now,
        onupdate=_epoch_now,
        nullable=False
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', status={self.status})>"
