"""Data Transfer Objects for User Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from src.domain.user import UserStatus


class RegisterUserCommandDTO(BaseModel):
    """
    Command DTO for registering a user account

    Used as input to RegisterUser use case.
    """

    email: EmailStr = Field(..., description="Login e-mail address")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    siret: Optional[str] = Field(
        default=None,
        pattern=r"^\d{14}$",
        description="SIRET business identifier (14 digits)"
    )
    company_address: Optional[str] = Field(default=None)
    company_phone: Optional[str] = Field(default=None, max_length=20)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "marie.dupont@example.fr",
                "first_name": "Marie",
                "last_name": "Dupont",
                "company_name": "Dupont Conseil",
                "siret": "73282932000074",
                "company_address": "12 rue de la Paix, 75002 Paris",
                "company_phone": "+33 1 23 45 67 89"
            }
        }


class UpdateProfileCommandDTO(BaseModel):
    """
    Command DTO for updating the profile of the current user

    Only fields explicitly set are applied.
    """

    user_id: str = Field(..., description="Authenticated user")
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    company_name: Optional[str] = Field(default=None, max_length=255)
    siret: Optional[str] = Field(default=None, pattern=r"^\d{14}$")
    company_address: Optional[str] = Field(default=None)
    company_phone: Optional[str] = Field(default=None, max_length=20)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    bank_name: Optional[str] = Field(default=None, max_length=255)
    iban: Optional[str] = Field(default=None, max_length=42)
    bic: Optional[str] = Field(default=None, max_length=11)


class UserProfileResponseDTO(BaseModel):
    """
    Response DTO for user profile operations

    Returned by RegisterUser, GetProfile, UpdateProfile and DeleteAccount.
    """

    id: str
    email: str
    first_name: str
    last_name: str
    company_name: Optional[str] = None
    siret: Optional[str] = None
    company_address: Optional[str] = None
    company_phone: Optional[str] = None
    logo_url: Optional[str] = None
    bank_name: Optional[str] = None
    iban: Optional[str] = None
    bic: Optional[str] = None
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "0d7f1e9a-55a4-4b0c-8f7e-2c1d4b6a9e30",
                "email": "marie.dupont@example.fr",
                "first_name": "Marie",
                "last_name": "Dupont",
                "company_name": "Dupont Conseil",
                "siret": "73282932000074",
                "status": "active",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z",
                "deleted_at": None
            }
        }
