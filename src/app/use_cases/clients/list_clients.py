"""ListClients Use Case

Retrieves the user's clients with pagination.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import ClientStatus
from .dtos import ClientResponseDTO, ListClientsResponseDTO


class ListClients:
    """
    Use case: List clients

    Soft-deleted clients are never listed. Clients are ordered by name.
    """

    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(
        self,
        user_id: str,
        status: Optional[ClientStatus] = ClientStatus.ACTIVE,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListClientsResponseDTO]:
        """
        List clients for a user with pagination.

        Args:
            user_id: Owning user
            status: Status filter (None lists every live client)
            limit: Maximum number of clients to return
            offset: Number of clients to skip

        Returns:
            Result[ListClientsResponseDTO]: Paginated client list
        """
        clients = await self.client_repo.get_by_user_id(
            user_id=user_id,
            status=status,
            limit=limit,
            offset=offset,
        )
        total = await self.client_repo.count_by_user_id(user_id=user_id, status=status)

        return Return.ok(
            ListClientsResponseDTO(
                clients=[ClientResponseDTO.model_validate(c) for c in clients],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
