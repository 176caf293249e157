"""CreateClient Use Case

Adds a client to the authenticated user's address book.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client, ClientStatus
from .dtos import CreateClientCommandDTO, ClientResponseDTO


class CreateClient:
    """
    Use Case: Create a client

    Business Rules:
    1. E-mail is stored lower-cased
    2. E-mail is unique per user among non-archived clients
    3. Client starts as active

    Flow:
    1. Check e-mail uniqueness for the user
    2. Create client
    3. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, command: CreateClientCommandDTO) -> Result[ClientResponseDTO]:
        try:
            email = command.email.lower()

            # Step 1: E-mail uniqueness
            existing = await self.client_repo.get_by_email(command.user_id, email)
            if existing:
                return Return.err(
                    Error(
                        code="CLIENT_ALREADY_EXISTS",
                        message=f"A client with e-mail {email} already exists",
                    )
                )

            # Step 2: Create client
            fields = command.model_dump(exclude={"user_id", "name", "email"})
            client = Client(
                user_id=command.user_id,
                name=command.name,
                email=email,
                status=ClientStatus.ACTIVE,
                **fields,
            )
            created = await self.client_repo.create(client)

            # Step 3: Commit
            await self.uow.commit()

            return Return.ok(ClientResponseDTO.model_validate(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_CLIENT_FAILED",
                    message="Failed to create client",
                    reason=str(e),
                )
            )
