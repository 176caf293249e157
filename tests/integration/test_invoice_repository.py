"""Integration tests for SqlAlchemyInvoiceRepository and SqlAlchemyLineItemRepository"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.domain.invoice import InvoiceStatus
from src.domain.line_item import LineItem


@pytest.mark.asyncio
class TestInvoiceRepository:

    async def test_next_sequence_starts_at_one(self, db_session: AsyncSession, user):
        repo = SqlAlchemyInvoiceRepository(db_session)

        assert await repo.next_invoice_sequence(user.id) == 1

    async def test_next_sequence_counts_deleted_invoices(self, db_session: AsyncSession, user, make_invoice):
        await make_invoice(invoice_sequence=1)
        await make_invoice(invoice_sequence=2, deleted_at=datetime.utcnow())
        repo = SqlAlchemyInvoiceRepository(db_session)

        assert await repo.next_invoice_sequence(user.id) == 3

    async def test_next_sequence_is_per_user(self, db_session: AsyncSession, other_user, make_invoice):
        await make_invoice(invoice_sequence=7)
        repo = SqlAlchemyInvoiceRepository(db_session)

        assert await repo.next_invoice_sequence(other_user.id) == 1

    async def test_list_excludes_deleted(self, db_session: AsyncSession, user, make_invoice):
        await make_invoice(invoice_sequence=1)
        await make_invoice(invoice_sequence=2, deleted_at=datetime.utcnow())
        repo = SqlAlchemyInvoiceRepository(db_session)

        invoices = await repo.get_by_user_id(user.id)
        total = await repo.count_by_user_id(user.id)

        assert [i.invoice_sequence for i in invoices] == [1]
        assert total == 1

    async def test_get_by_invoice_number(self, db_session: AsyncSession, user, make_invoice):
        created = await make_invoice(invoice_sequence=4)
        repo = SqlAlchemyInvoiceRepository(db_session)

        found = await repo.get_by_invoice_number(user.id, "INV-202403-00004")

        assert found is not None
        assert found.id == created.id

    async def test_overdue_candidates(self, db_session: AsyncSession, make_invoice):
        await make_invoice(invoice_sequence=1, status=InvoiceStatus.SENT, due_date=date(2024, 4, 1))
        await make_invoice(invoice_sequence=2, status=InvoiceStatus.VIEWED, due_date=date(2024, 3, 20))
        # Not candidates: paid, due today, deleted, draft
        await make_invoice(invoice_sequence=3, status=InvoiceStatus.PAID, due_date=date(2024, 3, 1))
        await make_invoice(invoice_sequence=4, status=InvoiceStatus.SENT, due_date=date(2024, 4, 15))
        await make_invoice(
            invoice_sequence=5,
            status=InvoiceStatus.SENT,
            due_date=date(2024, 3, 1),
            deleted_at=datetime.utcnow(),
        )
        await make_invoice(invoice_sequence=6, status=InvoiceStatus.DRAFT, due_date=date(2024, 3, 1))
        repo = SqlAlchemyInvoiceRepository(db_session)

        candidates = await repo.get_overdue_candidates(date(2024, 4, 15))

        assert [i.invoice_sequence for i in candidates] == [2, 1]


@pytest.mark.asyncio
class TestLineItemRepository:

    async def _line(self, invoice_id, line_order, deleted=False):
        return LineItem(
            invoice_id=invoice_id,
            description=f"Line {line_order}",
            quantity=Decimal("1.00"),
            unit_price=Decimal("10.00"),
            tax_rate=Decimal("20.00"),
            amount=Decimal("10.00"),
            tax_amount=Decimal("2.00"),
            total=Decimal("12.00"),
            line_order=line_order,
            deleted_at=datetime.utcnow() if deleted else None,
        )

    async def test_live_lines_in_order(self, db_session: AsyncSession, make_invoice):
        invoice = await make_invoice()
        repo = SqlAlchemyLineItemRepository(db_session)
        await repo.create(await self._line(invoice.id, 2))
        await repo.create(await self._line(invoice.id, 0))
        await repo.create(await self._line(invoice.id, 1, deleted=True))
        await db_session.commit()

        lines = await repo.get_by_invoice_id(invoice.id)

        assert [li.line_order for li in lines] == [0, 2]
        assert await repo.count_by_invoice_id(invoice.id) == 2
        assert await repo.next_line_order(invoice.id) == 3

    async def test_next_line_order_for_empty_invoice(self, db_session: AsyncSession, make_invoice):
        invoice = await make_invoice()
        repo = SqlAlchemyLineItemRepository(db_session)

        assert await repo.next_line_order(invoice.id) == 0
