"""RegisterUser Use Case

Creates a user account.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User, UserStatus
from .dtos import RegisterUserCommandDTO, UserProfileResponseDTO

logger = logging.getLogger(__name__)


class RegisterUser:
    """
    Use Case: Register a user account

    Business Rules:
    1. E-mail is stored lower-cased
    2. E-mail must be unique, deleted accounts included
    3. SIRET must be unique when provided
    4. Account starts as active

    Flow:
    1. Check e-mail uniqueness
    2. Check SIRET uniqueness
    3. Create user
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, command: RegisterUserCommandDTO) -> Result[UserProfileResponseDTO]:
        try:
            email = command.email.lower()

            # Step 1: E-mail uniqueness
            existing = await self.user_repo.get_by_email(email)
            if existing:
                return Return.err(
                    Error(
                        code="USER_ALREADY_EXISTS",
                        message=f"A user with e-mail {email} already exists",
                    )
                )

            # Step 2: SIRET uniqueness
            if command.siret:
                existing = await self.user_repo.get_by_siret(command.siret)
                if existing:
                    return Return.err(
                        Error(
                            code="SIRET_ALREADY_EXISTS",
                            message=f"SIRET {command.siret} is already registered",
                        )
                    )

            # Step 3: Create user
            user = User(
                email=email,
                first_name=command.first_name,
                last_name=command.last_name,
                company_name=command.company_name,
                siret=command.siret,
                company_address=command.company_address,
                company_phone=command.company_phone,
                status=UserStatus.ACTIVE,
            )
            created = await self.user_repo.create(user)

            # Step 4: Commit
            await self.uow.commit()

            logger.info(f"Registered user {created.id}")
            return Return.ok(UserProfileResponseDTO.model_validate(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REGISTER_USER_FAILED",
                    message="Failed to register user",
                    reason=str(e),
                )
            )
