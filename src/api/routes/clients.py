"""Client API Routes

FastAPI routes for managing the clients of the authenticated user.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError, error_example
from src.api.schemas.client_request import CreateClientRequestSchema, UpdateClientRequestSchema
from src.app.use_cases.clients import (
    ClientResponseDTO,
    CreateClient,
    CreateClientCommandDTO,
    DeleteClient,
    GetClient,
    ListClients,
    ListClientsResponseDTO,
    UpdateClient,
    UpdateClientCommandDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.domain.client import ClientStatus

router = APIRouter(prefix="/clients", tags=["Clients"])

CLIENT_NOT_FOUND = error_example(
    "Client not found", "CLIENT_NOT_FOUND", "Client a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10 not found"
)
CLIENT_FORBIDDEN = error_example(
    "Client belongs to another user", "FORBIDDEN", "You do not have access to this client"
)


@router.get("", response_model=ListClientsResponseDTO)
async def list_clients(
    status_filter: Optional[ClientStatus] = Query(
        default=ClientStatus.ACTIVE,
        alias="status",
        description="Filter by status",
    ),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    List clients of the authenticated user, ordered by name.

    Deleted (archived) clients are never listed.
    """
    use_case = ListClients(SqlAlchemyClientRepository(session))
    result = await use_case.execute(user_id, status=status_filter, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=ClientResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: error_example(
            "Client e-mail already used",
            "CLIENT_ALREADY_EXISTS",
            "A client with e-mail compta@acme.fr already exists",
        ),
    },
)
async def create_client(
    request: CreateClientRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a client.

    **Request body:**
    - `name` (required)
    - `email` (required): Unique among the non-archived clients of the user
    - address, company and contact fields (optional)
    """
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)

    command = CreateClientCommandDTO(user_id=user_id, **request.model_dump())

    result = await CreateClient(uow, client_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{client_id}",
    response_model=ClientResponseDTO,
    responses={404: CLIENT_NOT_FOUND, 403: CLIENT_FORBIDDEN},
)
async def get_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Get a client by id. Deleted clients are still returned."""
    result = await GetClient(SqlAlchemyClientRepository(session)).execute(user_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{client_id}",
    response_model=ClientResponseDTO,
    responses={404: CLIENT_NOT_FOUND, 403: CLIENT_FORBIDDEN},
)
async def update_client(
    client_id: str,
    request: UpdateClientRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Update a client. Only fields present in the body are changed."""
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)

    command = UpdateClientCommandDTO(
        user_id=user_id,
        client_id=client_id,
        **request.model_dump(exclude_unset=True),
    )

    result = await UpdateClient(uow, client_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{client_id}",
    response_model=ClientResponseDTO,
    responses={404: CLIENT_NOT_FOUND, 403: CLIENT_FORBIDDEN},
)
async def delete_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Soft-delete (archive) a client. Its invoices are kept."""
    uow = SqlAlchemyUnitOfWork(session)
    result = await DeleteClient(uow, SqlAlchemyClientRepository(session)).execute(user_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
