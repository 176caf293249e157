"""Line Item Domain Entity

Tracks individual billable rows within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class LineItem(BaseModel, table=True):
    """
    Line Item - Billable row within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - amount = quantity * unit_price
    - tax_amount = amount * tax_rate / 100, or 0 when tax_included
    - total = amount + tax_amount
    - Ordered by line_order within the invoice
    """

    __tablename__ = "line_items"
    __table_args__ = (
        Index('ix_line_items_invoice_id_line_order', 'invoice_id', 'line_order'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique line item identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Line item description (e.g., 'Consulting - January')"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Quantity (hours, units, days)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit"
    )

    tax_rate: Decimal = Field(
        default=Decimal("20.00"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent"
    )

    tax_included: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="True when unit_price already includes tax"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="quantity * unit_price"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Tax on amount"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="amount + tax_amount"
    )

    line_order: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Position within the invoice"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
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

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "c1d2e3f4-0000-4a5b-8c9d-0e1f2a3b4c5d",
                "invoice_id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "description": "Consulting - January",
                "quantity": "10.00",
                "unit_price": "100.00",
                "tax_rate": "20.00",
                "tax_included": False,
                "amount": "1000.00",
                "tax_amount": "200.00",
                "total": "1200.00",
                "line_order": 0,
            }
        }
