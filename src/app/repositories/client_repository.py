"""Client Repository Interface

Defines the contract for client persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.client import Client, ClientStatus


class ClientRepository(ABC):
    """
    Repository interface for Client persistence

    List queries never return soft-deleted clients.
    """

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """
        Create a new client

        Args:
            client: Client entity to persist

        Returns:
            Created Client
        """
        pass

    @abstractmethod
    async def get_by_id(self, client_id: str) -> Optional[Client]:
        """
        Retrieve client by ID, including soft-deleted clients

        Args:
            client_id: Client ID

        Returns:
            Client if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        status: Optional[ClientStatus] = ClientStatus.ACTIVE,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Client]:
        """
        Retrieve live clients of a user, ordered by name

        Args:
            user_id: Owning user
            status: Optional filter by status (None for any)
            limit: Maximum number of clients to return
            offset: Offset for pagination

        Returns:
            List of clients
        """
        pass

    @abstractmethod
    async def count_by_user_id(
        self,
        user_id: str,
        status: Optional[ClientStatus] = ClientStatus.ACTIVE,
    ) -> int:
        """Count live clients of a user matching the same filter as get_by_user_id"""
        pass

    @abstractmethod
    async def get_by_email(self, user_id: str, email: str) -> Optional[Client]:
        """
        Retrieve a non-archived client of a user by e-mail

        Args:
            user_id: Owning user
            email: E-mail address (matched case-insensitively)

        Returns:
            Client if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """
        Update an existing client

        Args:
            client: Client entity with updated values

        Returns:
            Updated Client
        """
        pass
