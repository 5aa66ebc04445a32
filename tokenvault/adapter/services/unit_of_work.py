from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from tokenvault.adapter.repositories.storage_slot_repository import StorageSlotRepository
from tokenvault.app.services.unit_of_work import UnitOfWork
from tokenvault.domain.errors import PersistenceError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern.

    Opens a fresh session per ``async with`` block so long-lived services
    can hold a factory instead of a request-scoped session.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        self.session = self.session_factory()
        # Initialize all repositories with the session
        self.slots = StorageSlotRepository(self.session)
        return self

    async def __aexit__(self, *args):
        try:
            await self.rollback()
        finally:
            await self.session.close()
            self.session = None

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to commit transaction") from exc

    async def rollback(self):
        await self.session.rollback()
