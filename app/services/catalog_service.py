"""
Generic maintenance of the single-column product lookup tables
(categories, subcategories, companies, car models).
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession


logger = logging.getLogger(__name__)


class LookupService:
    """List, create, rename and delete rows of one lookup table."""

    def __init__(self, db: AsyncSession, model, name_attr: str):
        self.db = db
        self.model = model
        self.name_attr = name_attr

    @property
    def name_column(self):
        return getattr(self.model, self.name_attr)

    async def list(
        self,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[dict], int]:
        """Rows ordered by name, each with its 1-based position in the full listing."""
        stmt = select(self.model).order_by(self.name_column, self.model.id)
        count_stmt = select(func.count(self.model.id))
        if search:
            stmt = stmt.where(self.name_column.ilike(f"%{search}%"))
            count_stmt = count_stmt.where(self.name_column.ilike(f"%{search}%"))

        total = (await self.db.execute(count_stmt)).scalar() or 0
        result = await self.db.execute(stmt.offset(skip).limit(limit))
        rows = [
            {"id": row.id, "name": getattr(row, self.name_attr), "index": skip + position}
            for position, row in enumerate(result.scalars().all(), start=1)
        ]
        return rows, total

    async def get(self, row_id: int):
        return await self.db.get(self.model, row_id)

    async def create(self, name: str):
        row = self.model(**{self.name_attr: name})
        self.db.add(row)
        await self.db.flush()
        logger.info(f"Created {self.model.__tablename__} row {row.id} ({name})")
        return row

    async def rename(self, row, name: str):
        setattr(row, self.name_attr, name)
        await self.db.flush()
        return row

    async def delete(self, row) -> None:
        await self.db.delete(row)
        await self.db.flush()
        logger.info(f"Deleted {self.model.__tablename__} row {row.id}")

    def to_item(self, row) -> dict:
        return {"id": row.id, "name": getattr(row, self.name_attr)}
