"""UpdateProfile Use Case

Updates identity, company and bank details of the authenticated user.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from .dtos import UpdateProfileCommandDTO, UserProfileResponseDTO


class UpdateProfile:
    """
    Use Case: Update own profile

    Business Rules:
    1. Only fields present in the command are changed
    2. SIRET must stay unique across users
    3. IBAN and BIC are stored upper-cased without spaces

    Flow:
    1. Load user
    2. Check SIRET uniqueness if it changes
    3. Apply changes and persist
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, command: UpdateProfileCommandDTO) -> Result[UserProfileResponseDTO]:
        try:
            # Step 1: Load user
            user = await self.user_repo.get_by_id(command.user_id)
            if user is None or user.is_deleted:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {command.user_id} not found",
                    )
                )

            changes = command.model_dump(exclude_unset=True, exclude={"user_id"})

            # Step 2: SIRET uniqueness
            new_siret = changes.get("siret")
            if new_siret and new_siret != user.siret:
                other = await self.user_repo.get_by_siret(new_siret)
                if other and other.id != user.id:
                    return Return.err(
                        Error(
                            code="SIRET_ALREADY_EXISTS",
                            message=f"SIRET {new_siret} is already registered",
                        )
                    )

            for field in ("iban", "bic"):
                if changes.get(field):
                    changes[field] = changes[field].replace(" ", "").upper()

            # Step 3: Apply changes
            for field, value in changes.items():
                if value is None and field in ("first_name", "last_name"):
                    continue
                setattr(user, field, value)
            user.updated_at = datetime.utcnow()

            updated = await self.user_repo.update(user)

            # Step 4: Commit
            await self.uow.commit()

            return Return.ok(UserProfileResponseDTO.model_validate(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PROFILE_FAILED",
                    message="Failed to update profile",
                    reason=str(e),
                )
            )
