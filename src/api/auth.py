"""Authenticated user resolution

The upstream gateway authenticates the caller and forwards the user id
in a header (AUTH_USER_HEADER). Every protected route depends on
get_current_user_id.
"""

import logging

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.api.error import ClientError
from src.depends import get_session
from src.domain.user import UserStatus

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> ClientError:
    return ClientError(Error(code="UNAUTHORIZED", message=message))


async def get_current_user_id(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> str:
    """
    Resolve the calling user

    Raises:
        ClientError(401): header missing, user unknown, deleted or suspended
    """
    user_id = request.headers.get(ApplicationConfig.AUTH_USER_HEADER)
    if not user_id:
        raise _unauthorized("Authentication required")

    user = await SqlAlchemyUserRepository(session).get_by_id(user_id)
    if not user or user.is_deleted or user.status != UserStatus.ACTIVE:
        logger.info(f"Rejected request for inactive or unknown user {user_id}")
        raise _unauthorized("User is not active")

    return user.id
