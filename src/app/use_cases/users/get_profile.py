"""GetProfile Use Case

Returns the profile of the authenticated user.
"""

from libs.result import Result, Return, Error
from src.app.repositories.user_repository import UserRepository
from .dtos import UserProfileResponseDTO


class GetProfile:
    """Use Case: View own profile"""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, user_id: str) -> Result[UserProfileResponseDTO]:
        user = await self.user_repo.get_by_id(user_id)

        if user is None or user.is_deleted:
            return Return.err(
                Error(
                    code="USER_NOT_FOUND",
                    message=f"User {user_id} not found",
                )
            )

        return Return.ok(UserProfileResponseDTO.model_validate(user))
