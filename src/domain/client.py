"""Client Domain Entity

Customers billed by a user.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String, Text
from src.domain.base import BaseModel, generate_uuid


class ClientStatus(str, Enum):
    """Client status types"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Client(BaseModel, table=True):
    """
    Client - Customer of a user

    Domain Rules:
    - Each client belongs to exactly one user
    - email is lower-cased and unique per user among non-archived clients
    - Soft delete archives the client (status=archived, deleted_at set)
    """

    __tablename__ = "clients"
    __table_args__ = (
        Index('ix_clients_user_id_status', 'user_id', 'status'),
        Index('ix_clients_name', 'name'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique client identifier (UUID)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Owning user"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client display name"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Billing e-mail address"
    )

    phone: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    postal_code: Optional[str] = Field(default=None, sa_column=Column(String(10), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    country: Optional[str] = Field(
        default="France",
        sa_column=Column(String(100), nullable=True),
    )

    company_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    siret: Optional[str] = Field(default=None, sa_column=Column(String(14), nullable=True))
    vat_number: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    contact_person: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    contact_phone: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    status: ClientStatus = Field(
        default=ClientStatus.ACTIVE,
        description="Client status (active, inactive, archived)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    deleted_at: Optional[datetime] = Field(
        default=None,
        description="Soft delete timestamp"
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
