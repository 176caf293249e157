"""Invoice Status History Domain Entity

Append-only audit trail of invoice status changes.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, ForeignKey, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.invoice import InvoiceStatus


class InvoiceStatusHistory(BaseModel, table=True):
    """
    Invoice Status History - One row per status change

    Domain Rules:
    - Exactly one row is written for every status change
    - Rows are immutable: never updated, never deleted
    - from_status is None for the initial status
    """

    __tablename__ = "invoice_status_history"
    __table_args__ = (
        Index('ix_invoice_status_history_invoice_id_created_at', 'invoice_id', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique history entry identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Foreign key to Invoice"
    )

    user_id: str = Field(
        sa_column=Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="User who performed the change"
    )

    from_status: Optional[InvoiceStatus] = Field(
        default=None,
        description="Previous status"
    )

    to_status: InvoiceStatus = Field(
        description="New status"
    )

    reason: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text reason for the change"
    )

    # "metadata" is reserved on declarative models
    change_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON, nullable=True),
        description="Additional context (e.g., {'automatic': true})"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Timestamp of the change"
    )
