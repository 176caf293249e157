"""Invoice use cases"""
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .update_invoice import UpdateInvoice
from .delete_invoice import DeleteInvoice
from .change_invoice_status import ChangeInvoiceStatus
from .get_status_history import GetStatusHistory
from .get_allowed_transitions import GetAllowedTransitions
from .mark_overdue_invoices import MarkOverdueInvoices
from .generate_invoice_pdf import GenerateInvoicePdf
from .send_invoice import SendInvoice
from .dtos import (
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    ChangeInvoiceStatusCommandDTO,
    SendInvoiceCommandDTO,
    InvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    InvoiceLineItemDTO,
    InvoiceClientDTO,
    ListInvoicesResponseDTO,
    StatusHistoryEntryDTO,
    StatusHistoryResponseDTO,
    TransitionOptionDTO,
    AllowedTransitionsResponseDTO,
    MarkOverdueResultDTO,
    InvoicePdfDTO,
    SendInvoiceResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "GetInvoice",
    "ListInvoices",
    "UpdateInvoice",
    "DeleteInvoice",
    "ChangeInvoiceStatus",
    "GetStatusHistory",
    "GetAllowedTransitions",
    "MarkOverdueInvoices",
    "GenerateInvoicePdf",
    "SendInvoice",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "ChangeInvoiceStatusCommandDTO",
    "SendInvoiceCommandDTO",
    "InvoiceResponseDTO",
    "InvoiceDetailResponseDTO",
    "InvoiceLineItemDTO",
    "InvoiceClientDTO",
    "ListInvoicesResponseDTO",
    "StatusHistoryEntryDTO",
    "StatusHistoryResponseDTO",
    "TransitionOptionDTO",
    "AllowedTransitionsResponseDTO",
    "MarkOverdueResultDTO",
    "InvoicePdfDTO",
    "SendInvoiceResponseDTO",
]
