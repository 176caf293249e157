"""DeleteAccount Use Case

Soft deletes the authenticated user's account.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.domain.user import UserStatus
from .dtos import UserProfileResponseDTO

logger = logging.getLogger(__name__)


class DeleteAccount:
    """
    Use Case: Delete own account

    The row is kept with status=deleted and deleted_at set, so invoices
    stay attached to their issuer.
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, user_id: str) -> Result[UserProfileResponseDTO]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if user is None or user.is_deleted:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {user_id} not found",
                    )
                )

            now = datetime.utcnow()
            user.status = UserStatus.DELETED
            user.deleted_at = now
            user.updated_at = now

            deleted = await self.user_repo.update(user)
            await self.uow.commit()

            logger.info(f"Soft deleted user {user_id}")
            return Return.ok(UserProfileResponseDTO.model_validate(deleted))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_ACCOUNT_FAILED",
                    message="Failed to delete account",
                    reason=str(e),
                )
            )
