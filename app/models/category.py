from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class ProductCategory(Base):
    """Top-level product grouping (e.g. Brake Parts, Filters)."""
    __tablename__ = "product_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ProductCategory(category_name='{self.category_name}')>"


class ProductSubcategory(Base):
    """Second-level product grouping."""
    __tablename__ = "product_subcategories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subcategory_name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ProductSubcategory(subcategory_name='{self.subcategory_name}')>"


class CarModel(Base):
    """Vehicle model a part fits; products list these as comma-separated ids."""
    __tablename__ = "car_models"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    model_name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<CarModel(model_name='{self.model_name}')>"
