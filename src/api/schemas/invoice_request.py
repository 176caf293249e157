"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.domain.invoice import InvoiceStatus


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating a draft invoice

    Used for POST /invoices endpoint.
    """

    client_id: str = Field(..., min_length=1, description="Billed client")
    invoice_date: Optional[date] = Field(default=None, description="Defaults to today")
    due_date: Optional[date] = Field(default=None, description="Defaults to invoice_date + payment delay")
    description: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    subtotal_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    payment_instructions: Optional[str] = None
    invoice_prefix: Optional[str] = Field(default=None, min_length=1, max_length=10)

    @field_validator("currency")
    @classmethod
    def uppercase_currency(cls, v):
        return v.upper() if v else v

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
                "invoice_date": "2024-03-01",
                "due_date": "2024-03-31",
                "description": "Web development - March 2024",
                "tax_rate": "20.00",
                "payment_terms": "30 days",
            }
        }


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for updating an invoice

    Used for PUT /invoices/{invoice_id}. Omitted fields are left unchanged.
    """

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

    @field_validator("currency")
    @classmethod
    def uppercase_currency(cls, v):
        return v.upper() if v else v


class ChangeStatusRequestSchema(BaseModel):
    """
    Request schema for changing invoice status

    Used for PUT /invoices/{invoice_id}/status endpoint.
    """

    status: InvoiceStatus
    reason: Optional[str] = Field(default=None, max_length=500)
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "PAID",
                "reason": "Bank transfer received",
                "metadata": {"payment_reference": "VIR-2024-0042"},
            }
        }


class SendInvoiceRequestSchema(BaseModel):
    """Request schema for POST /invoices/{invoice_id}/send"""

    recipient_email: Optional[EmailStr] = Field(
        default=None,
        description="Defaults to the client's e-mail"
    )
