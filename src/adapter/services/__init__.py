from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .email_service import (
    LoggingEmailService,
    WebhookEmailService,
    CompositeEmailService,
    create_email_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "LoggingEmailService",
    "WebhookEmailService",
    "CompositeEmailService",
    "create_email_service",
]
