"""SQLAlchemy Line Item Repository Implementation"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.line_item import LineItem


class SqlAlchemyLineItemRepository(LineItemRepository):
    """SQLAlchemy implementation of LineItemRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, line_item: LineItem) -> LineItem:
        self.session.add(line_item)
        await self.session.flush()
        await self.session.refresh(line_item)
        return line_item

    async def get_by_id(self, line_item_id: str) -> Optional[LineItem]:
        statement = select(LineItem).where(LineItem.id == line_item_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_invoice_id(self, invoice_id: str) -> List[LineItem]:
        statement = (
            select(LineItem)
            .where(LineItem.invoice_id == invoice_id)
            .where(LineItem.deleted_at.is_(None))
            .order_by(LineItem.line_order.asc(), LineItem.created_at.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_invoice_id(self, invoice_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(LineItem)
            .where(LineItem.invoice_id == invoice_id)
            .where(LineItem.deleted_at.is_(None))
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def next_line_order(self, invoice_id: str) -> int:
        statement = (
            select(func.max(LineItem.line_order))
            .where(LineItem.invoice_id == invoice_id)
            .where(LineItem.deleted_at.is_(None))
        )
        result = await self.session.execute(statement)
        max_order = result.scalar_one_or_none()

        return 0 if max_order is None else max_order + 1

    async def update(self, line_item: LineItem) -> LineItem:
        line_item.updated_at = datetime.utcnow()
        self.session.add(line_item)
        await self.session.flush()
        await self.session.refresh(line_item)
        return line_item
