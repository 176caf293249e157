"""DeleteClient Use Case

Archives (soft deletes) a client.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases.common import load_owned_client
from src.domain.client import ClientStatus
from .dtos import ClientResponseDTO


class DeleteClient:
    """
    Use Case: Delete a client

    Sets status=archived and deleted_at. Existing invoices keep their
    reference to the client.
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, user_id: str, client_id: str) -> Result[ClientResponseDTO]:
        try:
            loaded = await load_owned_client(self.client_repo, client_id, user_id)
            if loaded.is_err():
                return loaded
            client = loaded.value

            now = datetime.utcnow()
            client.status = ClientStatus.ARCHIVED
            client.deleted_at = now
            client.updated_at = now

            archived = await self.client_repo.update(client)
            await self.uow.commit()

            return Return.ok(ClientResponseDTO.model_validate(archived))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_CLIENT_FAILED",
                    message="Failed to delete client",
                    reason=str(e),
                )
            )
