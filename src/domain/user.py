"""User Domain Entity

Account owner of clients and invoices, with company and bank metadata
printed on invoices.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class UserStatus(str, Enum):
    """User account status"""
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class User(BaseModel, table=True):
    """
    User - Account holder

    Domain Rules:
    - email is unique and stored lower-cased
    - siret (French business id) is unique when present
    - Soft delete: status=deleted and deleted_at set, row is retained
    """

    __tablename__ = "users"
    __table_args__ = (
        Index('ix_users_email', 'email', unique=True),
        Index('ix_users_status', 'status'),
        Index('ix_users_created_at', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique user identifier (UUID)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Login e-mail address (lower-cased)"
    )

    first_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="First name"
    )

    last_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Last name"
    )

    company_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Company name printed on invoices"
    )

    siret: Optional[str] = Field(
        default=None,
        sa_column=Column(String(14), nullable=True, unique=True),
        description="SIRET business identifier (14 digits)"
    )

    company_address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Company postal address"
    )

    company_phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Company phone number"
    )

    logo_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Company logo URL"
    )

    bank_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Bank name for invoice footer"
    )

    iban: Optional[str] = Field(
        default=None,
        sa_column=Column(String(34), nullable=True),
        description="IBAN for payment instructions"
    )

    bic: Optional[str] = Field(
        default=None,
        sa_column=Column(String(11), nullable=True),
        description="BIC/SWIFT code"
    )

    status: UserStatus = Field(
        default=UserStatus.ACTIVE,
        description="Account status (active, suspended, deleted)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Account creation timestamp"
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
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
