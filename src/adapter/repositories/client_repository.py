"""SQLAlchemy Client Repository Implementation

Implements client persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client, ClientStatus


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def get_by_id(self, client_id: str) -> Optional[Client]:
        statement = select(Client).where(Client.id == client_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    def _live_clients(self, user_id: str, status: Optional[ClientStatus]):
        statement = (
            select(Client)
            .where(Client.user_id == user_id)
            .where(Client.deleted_at.is_(None))
        )
        if status:
            statement = statement.where(Client.status == status)
        return statement

    async def get_by_user_id(
        self,
        user_id: str,
        status: Optional[ClientStatus] = ClientStatus.ACTIVE,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Client]:
        """
        Retrieve live clients of a user, ordered by name

        Args:
            user_id: Owning user
            status: Optional filter by status (None for any)
            limit: Maximum number of clients to return
            offset: Offset for pagination

        Returns:
            List of clients
        """
        statement = self._live_clients(user_id, status)
        statement = statement.order_by(Client.name.asc(), Client.created_at.asc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_user_id(
        self,
        user_id: str,
        status: Optional[ClientStatus] = ClientStatus.ACTIVE,
    ) -> int:
        statement = (
            select(func.count())
            .select_from(Client)
            .where(Client.user_id == user_id)
            .where(Client.deleted_at.is_(None))
        )
        if status:
            statement = statement.where(Client.status == status)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_by_email(self, user_id: str, email: str) -> Optional[Client]:
        statement = (
            select(Client)
            .where(Client.user_id == user_id)
            .where(Client.email == email.lower())
            .where(Client.status != ClientStatus.ARCHIVED)
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def update(self, client: Client) -> Client:
        client.updated_at = datetime.utcnow()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client
