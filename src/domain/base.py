"""Base Domain Model

Shared SQLModel base for all persisted entities.
"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string UUID4 primary key"""
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base class for all domain entities"""
    pass
