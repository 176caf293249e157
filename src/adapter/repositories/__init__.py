from .user_repository import SqlAlchemyUserRepository
from .client_repository import SqlAlchemyClientRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .line_item_repository import SqlAlchemyLineItemRepository
from .invoice_status_history_repository import SqlAlchemyInvoiceStatusHistoryRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyLineItemRepository",
    "SqlAlchemyInvoiceStatusHistoryRepository",
]
