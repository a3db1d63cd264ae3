from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class ProductCompany(Base):
    """Manufacturer / brand of a product."""
    __tablename__ = "product_companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ProductCompany(company_name='{self.company_name}')>"
