from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .email_service import EmailService

__all__ = [
    "UnitOfWork",
    "PdfService",
    "EmailService",
]
