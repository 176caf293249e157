from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.email_service import create_email_service
from src.app.services.email_service import EmailService
from src.app.services.pdf_service import PdfService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_email_service = create_email_service(
    api_url=ApplicationConfig.EMAIL_API_URL,
    timeout=ApplicationConfig.EMAIL_API_TIMEOUT,
    from_address=ApplicationConfig.EMAIL_FROM_ADDRESS,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


def get_email_service() -> EmailService:
    return _email_service
