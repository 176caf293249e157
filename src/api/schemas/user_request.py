"""Request schemas for User API"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterUserRequestSchema(BaseModel):
    """
    Request schema for registering an account

    Used for POST /users endpoint.
    """

    email: EmailStr = Field(..., description="Login e-mail address")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    siret: Optional[str] = Field(
        default=None,
        description="SIRET business identifier (14 digits, spaces allowed)"
    )
    company_address: Optional[str] = None
    company_phone: Optional[str] = Field(default=None, max_length=20)

    @field_validator("siret")
    @classmethod
    def normalize_siret(cls, v):
        """Strip spaces and require exactly 14 digits"""
        if v is None:
            return v
        v = v.replace(" ", "")
        if len(v) != 14 or not v.isdigit():
            raise ValueError("SIRET must contain exactly 14 digits")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "marie.dupont@example.fr",
                "first_name": "Marie",
                "last_name": "Dupont",
                "company_name": "Dupont Conseil",
                "siret": "732 829 320 00074",
            }
        }


class UpdateProfileRequestSchema(BaseModel):
    """
    Request schema for updating the current profile

    Used for PUT /auth/profile endpoint. Omitted fields are left unchanged.
    """

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    siret: Optional[str] = Field(default=None, pattern=r"^\d{14}$")
    company_address: Optional[str] = None
    company_phone: Optional[str] = Field(default=None, max_length=20)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    bank_name: Optional[str] = Field(default=None, max_length=255)
    iban: Optional[str] = Field(default=None, max_length=42)
    bic: Optional[str] = Field(default=None, max_length=11)

    class Config:
        json_schema_extra = {
            "example": {
                "bank_name": "Banque Populaire",
                "iban": "FR76 3000 6000 0112 3456 7890 189",
                "bic": "AGRIFRPP",
            }
        }
