from .base import BaseModel, generate_uuid
from .user import User, UserStatus
from .client import Client, ClientStatus
from .invoice import Invoice, InvoiceStatus
from .line_item import LineItem
from .invoice_status_history import InvoiceStatusHistory

__all__ = [
    "BaseModel",
    "generate_uuid",
    "User",
    "UserStatus",
    "Client",
    "ClientStatus",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "InvoiceStatusHistory",
]
