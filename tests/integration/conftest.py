import pytest
import pytest_asyncio
from datetime import date, datetime
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from src.app.services.email_service import EmailService
from src.depends import get_email_service, get_session
from src.domain.client import Client, ClientStatus
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.user import User, UserStatus


class RecordingEmailService(EmailService):
    """E-mail service double that records deliveries and can be told to fail"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_invoice(self, recipient_email, invoice, sender, pdf_bytes) -> bool:
        if self.fail:
            return False
        self.sent.append(
            {
                "recipient_email": recipient_email,
                "invoice_number": invoice.invoice_number,
                "pdf_bytes": pdf_bytes,
            }
        )
        return True


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create an in-memory SQLite engine shared by every connection of a test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest_asyncio.fixture
async def client(db_session, email_service):
    """Create test client with database session and e-mail overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_service] = lambda: email_service

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _add(session: AsyncSession, entity):
    session.add(entity)
    await session.commit()
    await session.refresh(entity)
    return entity


@pytest_asyncio.fixture
async def user(db_session) -> User:
    return await _add(
        db_session,
        User(
            email="marie.dupont@example.fr",
            first_name="Marie",
            last_name="Dupont",
            company_name="Dupont Conseil",
            siret="73282932000074",
            iban="FR7630006000011234567890189",
            bic="AGRIFRPP",
            status=UserStatus.ACTIVE,
        ),
    )


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    return await _add(
        db_session,
        User(
            email="paul.martin@example.fr",
            first_name="Paul",
            last_name="Martin",
            status=UserStatus.ACTIVE,
        ),
    )


@pytest.fixture
def auth_headers(user):
    return {"X-User-Id": user.id}


@pytest.fixture
def other_auth_headers(other_user):
    return {"X-User-Id": other_user.id}


@pytest_asyncio.fixture
async def acme(db_session, user) -> Client:
    """An active client of user"""
    return await _add(
        db_session,
        Client(
            user_id=user.id,
            name="Acme SARL",
            email="compta@acme.fr",
            city="Lyon",
            postal_code="69002",
            country="France",
            status=ClientStatus.ACTIVE,
        ),
    )


@pytest.fixture
def make_invoice(db_session, user, acme):
    """Persist an invoice of user for acme"""

    async def _make(**overrides) -> Invoice:
        sequence = overrides.pop("invoice_sequence", 1)
        values = dict(
            user_id=user.id,
            client_id=acme.id,
            invoice_number=f"INV-202403-{sequence:05d}",
            invoice_sequence=sequence,
            invoice_date=date(2024, 3, 1),
            due_date=date(2024, 3, 31),
            status=InvoiceStatus.DRAFT,
            currency="EUR",
            tax_rate=Decimal("20.00"),
            subtotal_amount=Decimal("100.00"),
            tax_amount=Decimal("20.00"),
            total_amount=Decimal("120.00"),
            paid_amount=Decimal("0.00"),
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        )
        values.update(overrides)
        return await _add(db_session, Invoice(**values))

    return _make
