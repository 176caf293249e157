"""User Repository Interface

Defines the contract for user persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.user import User


class UserRepository(ABC):
    """Repository interface for User persistence"""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user

        Args:
            user: User entity to persist

        Returns:
            Created User
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve user by ID, including soft-deleted users

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by e-mail, deleted accounts included

        Args:
            email: E-mail address (matched case-insensitively)

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_siret(self, siret: str) -> Optional[User]:
        """Retrieve a user by SIRET"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Update an existing user

        Args:
            user: User entity with updated values

        Returns:
            Updated User
        """
        pass
