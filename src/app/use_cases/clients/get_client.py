"""GetClient Use Case"""

from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases.common import load_owned_client
from .dtos import ClientResponseDTO


class GetClient:
    """
    Use Case: View a client

    Archived (soft-deleted) clients remain retrievable by id.
    """

    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, user_id: str, client_id: str) -> Result[ClientResponseDTO]:
        loaded = await load_owned_client(self.client_repo, client_id, user_id, allow_deleted=True)
        if loaded.is_err():
            return loaded

        return Return.ok(ClientResponseDTO.model_validate(loaded.value))
