"""UpdateClient Use Case"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases.common import load_owned_client
from src.domain.client import ClientStatus
from .dtos import UpdateClientCommandDTO, ClientResponseDTO

REQUIRED_FIELDS = ("name", "email")


class UpdateClient:
    """
    Use Case: Update a client

    Business Rules:
    1. Only fields present in the command are changed
    2. A changed e-mail must stay unique for the user
    3. Archiving goes through DeleteClient, not through status

    Flow:
    1. Load client and check ownership
    2. Validate e-mail and status changes
    3. Apply changes and persist
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, command: UpdateClientCommandDTO) -> Result[ClientResponseDTO]:
        try:
            # Step 1: Load client
            loaded = await load_owned_client(self.client_repo, command.client_id, command.user_id)
            if loaded.is_err():
                return loaded
            client = loaded.value

            changes = command.model_dump(exclude_unset=True, exclude={"user_id", "client_id"})

            # Step 2: Validate
            if changes.get("status") == ClientStatus.ARCHIVED:
                return Return.err(
                    Error(
                        code="INVALID_CLIENT_STATUS",
                        message="Use DELETE to archive a client",
                    )
                )

            if changes.get("email"):
                changes["email"] = changes["email"].lower()
                if changes["email"] != client.email:
                    other = await self.client_repo.get_by_email(command.user_id, changes["email"])
                    if other and other.id != client.id:
                        return Return.err(
                            Error(
                                code="CLIENT_ALREADY_EXISTS",
                                message=f"A client with e-mail {changes['email']} already exists",
                            )
                        )

            # Step 3: Apply changes
            for field, value in changes.items():
                if value is None and field in REQUIRED_FIELDS + ("status",):
                    continue
                setattr(client, field, value)
            client.updated_at = datetime.utcnow()

            updated = await self.client_repo.update(client)

            # Step 4: Commit
            await self.uow.commit()

            return Return.ok(ClientResponseDTO.model_validate(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_CLIENT_FAILED",
                    message="Failed to update client",
                    reason=str(e),
                )
            )
