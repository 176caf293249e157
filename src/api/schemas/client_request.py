"""Request schemas for Client API"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from src.domain.client import ClientStatus


class ClientFieldsSchema(BaseModel):
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


class CreateClientRequestSchema(ClientFieldsSchema):
    """
    Request schema for creating a client

    Used for POST /clients endpoint.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme SARL",
                "email": "compta@acme.fr",
                "address": "5 place Bellecour",
                "postal_code": "69002",
                "city": "Lyon",
                "country": "France",
                "vat_number": "FR40303265045",
            }
        }


class UpdateClientRequestSchema(ClientFieldsSchema):
    """
    Request schema for updating a client

    Used for PUT /clients/{client_id}. Omitted fields are left unchanged.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    status: Optional[ClientStatus] = None
