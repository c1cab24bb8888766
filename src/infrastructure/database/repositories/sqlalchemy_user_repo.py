"""SQLAlchemy implementation of User repository."""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository.

    Account rows are written by the auth subsystem; this service only
    removes them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def delete(self, id: UUID) -> bool:
        """Delete a user."""
        stmt = delete(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)
