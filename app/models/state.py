from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class State(Base):
    """Indian state / union territory used for GST place-of-supply."""
    __tablename__ = "states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    state_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    code: Mapped[int] = mapped_column(Integer, default=0, nullable=False, comment="GST state code")

    def __repr__(self) -> str:
        return f"<State(state_name='{self.state_name}')>"
