"""Shared fixtures for unit tests"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.client import Client, ClientStatus
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import LineItem
from src.domain.user import User, UserStatus


def _return_first_arg(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_return_first_arg)
    repo.update = AsyncMock(side_effect=_return_first_arg)
    return repo


@pytest.fixture
def mock_line_item_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_return_first_arg)
    repo.update = AsyncMock(side_effect=_return_first_arg)
    repo.get_by_invoice_id = AsyncMock(return_value=[])
    repo.count_by_invoice_id = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_history_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_return_first_arg)
    return repo


@pytest.fixture
def mock_client_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_return_first_arg)
    repo.update = AsyncMock(side_effect=_return_first_arg)
    return repo


@pytest.fixture
def mock_user_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_return_first_arg)
    repo.update = AsyncMock(side_effect=_return_first_arg)
    return repo


@pytest.fixture
def sample_user():
    return User(
        id="user-1",
        email="marie.dupont@example.fr",
        first_name="Marie",
        last_name="Dupont",
        company_name="Dupont Conseil",
        siret="73282932000074",
        iban="FR7630006000011234567890189",
        bic="AGRIFRPP",
        status=UserStatus.ACTIVE,
        created_at=datetime(2024, 1, 1, 9, 0, 0),
        updated_at=datetime(2024, 1, 1, 9, 0, 0),
    )


@pytest.fixture
def sample_client():
    return Client(
        id="client-1",
        user_id="user-1",
        name="Acme SARL",
        email="compta@acme.fr",
        city="Lyon",
        country="France",
        status=ClientStatus.ACTIVE,
        created_at=datetime(2024, 1, 2, 9, 0, 0),
        updated_at=datetime(2024, 1, 2, 9, 0, 0),
    )


@pytest.fixture
def make_invoice():
    """Factory for invoices with sensible defaults"""

    def _make(**overrides) -> Invoice:
        values = dict(
            id="invoice-1",
            user_id="user-1",
            client_id="client-1",
            invoice_number="INV-202403-00001",
            invoice_sequence=1,
            invoice_date=date(2024, 3, 1),
            due_date=date(2024, 3, 31),
            status=InvoiceStatus.DRAFT,
            currency="EUR",
            tax_rate=Decimal("20.00"),
            subtotal_amount=Decimal("100.00"),
            tax_amount=Decimal("20.00"),
            total_amount=Decimal("120.00"),
            paid_amount=Decimal("0.00"),
            created_at=datetime(2024, 3, 1, 9, 0, 0),
            updated_at=datetime(2024, 3, 1, 9, 0, 0),
        )
        values.update(overrides)
        return Invoice(**values)

    return _make


@pytest.fixture
def make_line_item():
    """Factory for line items with sensible defaults"""

    def _make(**overrides) -> LineItem:
        values = dict(
            id="line-1",
            invoice_id="invoice-1",
            description="Development - 5 days",
            quantity=Decimal("5.00"),
            unit_price=Decimal("450.00"),
            tax_rate=Decimal("20.00"),
            tax_included=False,
            amount=Decimal("2250.00"),
            tax_amount=Decimal("450.00"),
            total=Decimal("2700.00"),
            line_order=0,
            created_at=datetime(2024, 3, 1, 9, 0, 0),
            updated_at=datetime(2024, 3, 1, 9, 0, 0),
        )
        values.update(overrides)
        return LineItem(**values)

    return _make
