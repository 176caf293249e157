"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, EmailStr, Field

from src.domain.invoice import InvoiceStatus


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating a draft invoice

    Used as input to CreateInvoice use case. Unset optional values fall
    back to the service defaults (currency, tax rate, payment delay).
    """

    user_id: str = Field(..., description="Issuing user")
    client_id: str = Field(..., description="Billed client")
    invoice_date: Optional[date] = Field(default=None, description="Defaults to today")
    due_date: Optional[date] = Field(default=None, description="Defaults to invoice_date + payment delay")
    description: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    subtotal_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Subtotal used until line items are added"
    )
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    payment_instructions: Optional[str] = None
    invoice_prefix: Optional[str] = Field(default=None, min_length=1, max_length=10)

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "client_id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
                "invoice_date": "2024-01-15",
                "description": "Consulting January 2024",
                "tax_rate": "20.00",
                "payment_terms": "30 days net"
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for updating an invoice

    Only fields explicitly set are applied. Billing fields (client, dates,
    currency, tax rate, subtotal) can only change while the invoice is DRAFT.
    """

    user_id: str
    invoice_id: str
    client_id: Optional[str] = None
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    subtotal_amount: Optional[Decimal] = Field(default=None, ge=0)
    paid_amount: Optional[Decimal] = Field(default=None, ge=0)
    paid_date: Optional[date] = None
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    payment_instructions: Optional[str] = None


class ChangeInvoiceStatusCommandDTO(BaseModel):
    """
    Command DTO for changing invoice status

    Used as input to ChangeInvoiceStatus use case.
    """

    user_id: str
    invoice_id: str
    status: InvoiceStatus = Field(..., description="Requested status")
    reason: Optional[str] = Field(default=None, max_length=500)
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "invoice_id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "status": "PAID",
                "reason": "Bank transfer received",
                "metadata": {"payment_reference": "VIR-2024-0042"}
            }
        }


class SendInvoiceCommandDTO(BaseModel):
    """Command DTO for e-mailing an invoice PDF"""

    user_id: str
    invoice_id: str
    recipient_email: Optional[EmailStr] = Field(
        default=None,
        description="Defaults to the client's e-mail"
    )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, UpdateInvoice, DeleteInvoice, ChangeInvoiceStatus.
    """

    id: str
    user_id: str
    client_id: str
    invoice_number: str
    invoice_sequence: int
    invoice_date: date
    due_date: date
    paid_date: Optional[date] = None
    status: InvoiceStatus
    description: Optional[str] = None
    notes: Optional[str] = None
    currency: str
    tax_rate: Decimal
    subtotal_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    payment_terms: Optional[str] = None
    payment_instructions: Optional[str] = None
    sent_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "client_id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
                "invoice_number": "INV-202401-00001",
                "invoice_sequence": 1,
                "invoice_date": "2024-01-15",
                "due_date": "2024-02-14",
                "status": "DRAFT",
                "currency": "EUR",
                "tax_rate": "20.00",
                "subtotal_amount": "1000.00",
                "tax_amount": "200.00",
                "total_amount": "1200.00",
                "paid_amount": "0.00",
                "created_at": "2024-01-15T09:00:00Z",
                "updated_at": "2024-01-15T09:00:00Z"
            }
        }


class InvoiceLineItemDTO(BaseModel):
    """Line item as embedded in invoice detail"""

    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    tax_included: bool
    amount: Decimal
    tax_amount: Decimal
    total: Decimal
    line_order: int

    class Config:
        from_attributes = True


class InvoiceClientDTO(BaseModel):
    """Client summary embedded in invoice detail"""

    id: str
    name: str
    email: str
    company_name: Optional[str] = None

    class Config:
        from_attributes = True


class InvoiceDetailResponseDTO(InvoiceResponseDTO):
    """Invoice with live line items, client summary and allowed next statuses"""

    client: Optional[InvoiceClientDTO] = None
    line_items: List[InvoiceLineItemDTO] = Field(default_factory=list)
    allowed_transitions: List[InvoiceStatus] = Field(default_factory=list)


class ListInvoicesResponseDTO(BaseModel):
    """Paginated invoice list"""

    invoices: List[InvoiceResponseDTO]
    total: int
    limit: int
    offset: int


class StatusHistoryEntryDTO(BaseModel):
    """One invoice status change"""

    id: str
    invoice_id: str
    user_id: str
    from_status: Optional[InvoiceStatus] = None
    to_status: InvoiceStatus
    reason: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime


class StatusHistoryResponseDTO(BaseModel):
    """Paginated status history, newest first"""

    invoice_id: str
    entries: List[StatusHistoryEntryDTO]
    total: int
    limit: int
    offset: int


class TransitionOptionDTO(BaseModel):
    status: InvoiceStatus
    description: str
    automatic: bool


class AllowedTransitionsResponseDTO(BaseModel):
    """Statuses reachable from the invoice's current status"""

    invoice_id: str
    current_status: InvoiceStatus
    transitions: List[TransitionOptionDTO]


class MarkOverdueResultDTO(BaseModel):
    """Result of one overdue detection run"""

    checked: int = Field(..., description="Open invoices past their due date")
    marked: int = Field(..., description="Invoices moved to OVERDUE")
    invoice_ids: List[str] = Field(default_factory=list)
    run_date: date


class InvoicePdfDTO(BaseModel):
    """Rendered invoice PDF"""

    invoice_id: str
    invoice_number: str
    filename: str
    content: bytes


class SendInvoiceResponseDTO(BaseModel):
    """Delivery summary returned by SendInvoice"""

    invoice_id: str
    invoice_number: str
    recipient_email: str
    status: InvoiceStatus
    sent_at: Optional[datetime] = None
    pdf_size: int
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "invoice_number": "INV-202401-00001",
                "recipient_email": "compta@acme.fr",
                "status": "SENT",
                "sent_at": "2024-01-15T10:00:00Z",
                "pdf_size": 2417,
                "message": "Invoice INV-202401-00001 sent to compta@acme.fr"
            }
        }
