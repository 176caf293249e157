from .user_repository import UserRepository
from .client_repository import ClientRepository
from .invoice_repository import InvoiceRepository
from .line_item_repository import LineItemRepository
from .invoice_status_history_repository import InvoiceStatusHistoryRepository

__all__ = [
    "UserRepository",
    "ClientRepository",
    "InvoiceRepository",
    "LineItemRepository",
    "InvoiceStatusHistoryRepository",
]
