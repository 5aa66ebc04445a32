from datetime import datetime, UTC
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tokenvault.app.repositories.storage_slot_repository import IStorageSlotRepository
from tokenvault.domain.entities import StorageSlot
from tokenvault.domain.errors import PersistenceError


class StorageSlotRepository(IStorageSlotRepository):
    """Storage slot repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Optional[str]:
        """Get the blob stored under key"""
        try:
            stmt = select(StorageSlot).where(StorageSlot.key == key)
            result = await self.session.execute(stmt)
            slot = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read slot {key!r}") from exc
        return slot.value if slot else None

    async def put(self, key: str, value: str) -> None:
        """Create or overwrite the blob stored under key"""
        try:
            slot = await self.session.get(StorageSlot, key)
            if slot is None:
                slot = StorageSlot(key=key, value=value)
            else:
                slot.value = value
                slot.updated_at = datetime.now(UTC)
            self.session.add(slot)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to write slot {key!r}") from exc
