"""Request schemas for Line Item API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class AddLineItemRequestSchema(BaseModel):
    """
    Request schema for adding a line item

    Used for POST /invoices/{invoice_id}/line-items endpoint.
    """

    description: str = Field(..., min_length=1, max_length=1000)
    quantity: Decimal = Field(..., gt=0, description="Quantity (must be > 0)")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit")
    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Defaults to the invoice tax rate"
    )
    tax_included: bool = False
    line_order: Optional[int] = Field(default=None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Development - 5 days",
                "quantity": "5",
                "unit_price": "450.00",
                "tax_rate": "20.00",
            }
        }


class UpdateLineItemRequestSchema(BaseModel):
    """Request schema for PUT /invoices/{invoice_id}/line-items/{line_item_id}"""

    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_included: Optional[bool] = None
    line_order: Optional[int] = Field(default=None, ge=0)
