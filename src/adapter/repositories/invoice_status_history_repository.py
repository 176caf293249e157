"""SQLAlchemy Invoice Status History Repository Implementation

Append-only: rows are inserted and read, never updated or deleted.
"""

from typing import List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.domain.invoice_status_history import InvoiceStatusHistory


class SqlAlchemyInvoiceStatusHistoryRepository(InvoiceStatusHistoryRepository):
    """SQLAlchemy implementation of InvoiceStatusHistoryRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: InvoiceStatusHistory) -> InvoiceStatusHistory:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_invoice_id(
        self,
        invoice_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> List[InvoiceStatusHistory]:
        statement = (
            select(InvoiceStatusHistory)
            .where(InvoiceStatusHistory.invoice_id == invoice_id)
            .order_by(InvoiceStatusHistory.created_at.desc(), InvoiceStatusHistory.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_invoice_id(self, invoice_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(InvoiceStatusHistory)
            .where(InvoiceStatusHistory.invoice_id == invoice_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
