"""Invoice Domain Entity

Tracks invoices issued by a user to one of their clients.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "DRAFT"
    SENT = "SENT"
    VIEWED = "VIEWED"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Invoice(BaseModel, table=True):
    """
    Invoice - Bill issued by a user to a client

    Domain Rules:
    - invoice_number is unique per user ({prefix}-{YYYYMM}-{sequence:05d})
    - total_amount = subtotal_amount + tax_amount
    - paid_amount never exceeds total_amount
    - due_date is never before invoice_date
    - Status transitions are validated by src.domain.invoice_workflow
    - sent_at, viewed_at and paid_date are set when status changes
    """

    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint('user_id', 'invoice_number', name='uq_invoices_user_invoice_number'),
        Index('ix_invoices_user_id_status', 'user_id', 'status'),
        Index('ix_invoices_client_id_status', 'client_id', 'status'),
        Index('ix_invoices_due_date', 'due_date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Issuing user"
    )

    client_id: str = Field(
        sa_column=Column(String(36), ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True),
        description="Billed client"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Invoice number (e.g., INV-202401-00001)"
    )

    invoice_sequence: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False),
        description="Per-user sequence used to build invoice_number"
    )

    invoice_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    paid_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Date the invoice was paid"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (DRAFT, SENT, VIEWED, PAID, OVERDUE, CANCELLED, REFUNDED)"
    )

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    currency: str = Field(
        default="EUR",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    tax_rate: Decimal = Field(
        default=Decimal("20.00"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent"
    )

    subtotal_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of line amounts before tax"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Total tax"
    )

    total_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="subtotal_amount + tax_amount"
    )

    paid_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount received so far"
    )

    payment_terms: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    payment_instructions: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    sent_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was sent"
    )

    viewed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was viewed by the client"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    deleted_at: Optional[datetime] = Field(
        default=None,
        description="Soft delete timestamp"
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def balance_due(self) -> Decimal:
        return self.total_amount - self.paid_amount

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "client_id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
                "invoice_number": "INV-202401-00001",
                "status": "SENT",
                "subtotal_amount": "1000.00",
                "tax_amount": "200.00",
                "total_amount": "1200.00",
                "paid_amount": "0.00",
                "currency": "EUR",
                "invoice_date": "2024-01-15",
                "due_date": "2024-02-14",
            }
        }
