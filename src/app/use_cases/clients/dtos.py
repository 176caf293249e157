"""Data Transfer Objects for Client Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from src.domain.client import ClientStatus


class ClientFieldsDTO(BaseModel):
    """Optional client attributes shared by create and update commands"""

    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    postal_code: Optional[str] = Field(default=None, max_length=10)
    city: Optional[str] = Field(default=None, max_length=100)
    country: Optional[str] = Field(default="France", max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    siret: Optional[str] = Field(default=None, min_length=14, max_length=14)
    vat_number: Optional[str] = Field(default=None, max_length=20)
    contact_person: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=20)


class CreateClientCommandDTO(ClientFieldsDTO):
    """
    Command DTO for creating a client

    Used as input to CreateClient use case.
    """

    user_id: str = Field(..., description="Owning user")
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Billing e-mail address")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "name": "Acme SARL",
                "email": "compta@acme.fr",
                "city": "Lyon",
                "postal_code": "69002",
                "country": "France"
            }
        }


class UpdateClientCommandDTO(ClientFieldsDTO):
    """
    Command DTO for updating a client

    Only fields explicitly set are applied.
    """

    user_id: str
    client_id: str
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    status: Optional[ClientStatus] = Field(
        default=None,
        description="active or inactive (archiving is done by deletion)"
    )


class ClientResponseDTO(BaseModel):
    """Response DTO for a single client"""

    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    company_name: Optional[str] = None
    siret: Optional[str] = None
    vat_number: Optional[str] = None
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None
    status: ClientStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
                "user_id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "name": "Acme SARL",
                "email": "compta@acme.fr",
                "country": "France",
                "status": "active",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z",
                "deleted_at": None
            }
        }


class ListClientsResponseDTO(BaseModel):
    """Paginated client list"""

    clients: List[ClientResponseDTO]
    total: int
    limit: int
    offset: int
