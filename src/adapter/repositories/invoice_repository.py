"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    def _filter_live(self, statement, user_id: str, status, client_id):
        statement = statement.where(Invoice.user_id == user_id).where(Invoice.deleted_at.is_(None))

        if status:
            statement = statement.where(Invoice.status == status)
        if client_id:
            statement = statement.where(Invoice.client_id == client_id)

        return statement

    async def get_by_user_id(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve live invoices of a user, newest invoice_date first

        Args:
            user_id: Owning user
            status: Optional filter by status
            client_id: Optional filter by client
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        statement = self._filter_live(select(Invoice), user_id, status, client_id)

        statement = statement.order_by(Invoice.invoice_date.desc(), Invoice.invoice_sequence.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_user_id(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
    ) -> int:
        statement = self._filter_live(
            select(func.count()).select_from(Invoice), user_id, status, client_id
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_by_invoice_number(self, user_id: str, invoice_number: str) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .where(Invoice.invoice_number == invoice_number)
            .where(Invoice.deleted_at.is_(None))
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_overdue_candidates(self, today: date, limit: int = 500) -> List[Invoice]:
        """
        Retrieve live SENT/VIEWED invoices whose due_date is before today

        Args:
            today: Reference date
            limit: Maximum number of invoices to return

        Returns:
            List of invoices, oldest due date first
        """
        statement = (
            select(Invoice)
            .where(Invoice.status.in_([InvoiceStatus.SENT, InvoiceStatus.VIEWED]))
            .where(Invoice.due_date < today)
            .where(Invoice.deleted_at.is_(None))
            .order_by(Invoice.due_date.asc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def next_invoice_sequence(self, user_id: str) -> int:
        """
        Next per-user invoice sequence

        Soft-deleted invoices keep their sequence so numbers are never reused.

        Returns:
            Highest invoice_sequence of the user + 1
        """
        statement = select(func.max(Invoice.invoice_sequence)).where(Invoice.user_id == user_id)
        result = await self.session.execute(statement)
        max_sequence = result.scalar_one_or_none()

        return (max_sequence or 0) + 1
