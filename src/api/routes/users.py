"""User API Routes

FastAPI routes for account registration and profile management.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError, error_example
from src.api.schemas.user_request import RegisterUserRequestSchema, UpdateProfileRequestSchema
from src.app.use_cases.users import (
    DeleteAccount,
    GetProfile,
    RegisterUser,
    RegisterUserCommandDTO,
    UpdateProfile,
    UpdateProfileCommandDTO,
    UserProfileResponseDTO,
)
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=UserProfileResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: error_example(
            "E-mail or SIRET already registered",
            "USER_ALREADY_EXISTS",
            "A user with e-mail marie.dupont@example.fr already exists",
        ),
    },
)
async def register_user(
    request: RegisterUserRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Register a new account.

    **Request body:**
    - `email` (required): Login e-mail, stored lower-cased
    - `first_name`, `last_name` (required)
    - `company_name`, `siret`, `company_address`, `company_phone` (optional)

    **Returns:**
    - 201: Account created
    - 409: E-mail or SIRET already registered
    - 422: Invalid request body
    """
    uow = SqlAlchemyUnitOfWork(session)
    user_repo = SqlAlchemyUserRepository(session)

    command = RegisterUserCommandDTO(**request.model_dump())

    result = await RegisterUser(uow, user_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/auth/profile",
    response_model=UserProfileResponseDTO,
    responses={401: error_example("Not authenticated", "UNAUTHORIZED", "Authentication required")},
)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Return the profile of the authenticated user."""
    result = await GetProfile(SqlAlchemyUserRepository(session)).execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/auth/profile",
    response_model=UserProfileResponseDTO,
    responses={
        409: error_example(
            "SIRET already registered",
            "SIRET_ALREADY_EXISTS",
            "SIRET 73282932000074 is already registered",
        ),
    },
)
async def update_profile(
    request: UpdateProfileRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Update the profile of the authenticated user.

    Only fields present in the body are changed. IBAN and BIC are stored
    upper-cased without spaces; they are printed in the invoice footer.
    """
    uow = SqlAlchemyUnitOfWork(session)
    user_repo = SqlAlchemyUserRepository(session)

    command = UpdateProfileCommandDTO(user_id=user_id, **request.model_dump(exclude_unset=True))

    result = await UpdateProfile(uow, user_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/auth/profile", response_model=UserProfileResponseDTO)
async def delete_account(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Soft-delete the account of the authenticated user.

    The account is marked deleted; later requests with this user id are
    rejected with 401.
    """
    uow = SqlAlchemyUnitOfWork(session)
    result = await DeleteAccount(uow, SqlAlchemyUserRepository(session)).execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
