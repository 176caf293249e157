"""SQLAlchemy User Repository Implementation

Implements user persistence using SQLAlchemy async session.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User


class SqlAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        statement = select(User).where(User.id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email.lower())
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def get_by_siret(self, siret: str) -> Optional[User]:
        statement = select(User).where(User.siret == siret)
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def update(self, user: User) -> User:
        user.updated_at = datetime.utcnow()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
