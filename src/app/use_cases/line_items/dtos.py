"""Data Transfer Objects for Line Item Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class AddLineItemCommandDTO(BaseModel):
    """
    Command DTO for adding a line item to a draft invoice

    tax_rate defaults to the invoice tax rate, line_order to the next free
    position.
    """

    user_id: str
    invoice_id: str
    description: str = Field(..., min_length=1, max_length=1000)
    quantity: Decimal = Field(..., gt=0, description="Quantity (must be > 0)")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit")
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_included: bool = False
    line_order: Optional[int] = Field(default=None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "invoice_id": "5b0c6f4e-1a7e-4d8e-9d1c-3f0a2b9e7c11",
                "description": "Consulting - January",
                "quantity": "10",
                "unit_price": "100.00",
                "tax_rate": "20.00",
                "tax_included": False
            }
        }


class UpdateLineItemCommandDTO(BaseModel):
    """
    Command DTO for updating a line item

    Only fields explicitly set are applied; amounts are recomputed.
    """

    user_id: str
    invoice_id: str
    line_item_id: str
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_included: Optional[bool] = None
    line_order: Optional[int] = Field(default=None, ge=0)


class LineItemResponseDTO(BaseModel):
    """Response DTO for a single line item"""

    id: str
    invoice_id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    tax_included: bool
    amount: Decimal
    tax_amount: Decimal
    total: Decimal
    line_order: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
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
                "created_at": "2024-01-15T09:00:00Z",
                "updated_at": "2024-01-15T09:00:00Z"
            }
        }


class InvoiceTotalsDTO(BaseModel):
    """Invoice aggregates after a line item change"""

    invoice_id: str
    subtotal_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    currency: str

    @classmethod
    def from_invoice(cls, invoice) -> "InvoiceTotalsDTO":
        return cls(
            invoice_id=invoice.id,
            subtotal_amount=invoice.subtotal_amount,
            tax_amount=invoice.tax_amount,
            total_amount=invoice.total_amount,
            currency=invoice.currency,
        )


class LineItemMutationResponseDTO(BaseModel):
    """Returned by AddLineItem, UpdateLineItem and DeleteLineItem"""

    line_item: LineItemResponseDTO
    invoice_totals: InvoiceTotalsDTO


class ListLineItemsResponseDTO(BaseModel):
    """Live line items of an invoice in line_order"""

    line_items: List[LineItemResponseDTO]
    invoice_totals: InvoiceTotalsDTO
