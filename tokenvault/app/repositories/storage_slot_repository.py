from abc import ABC, abstractmethod
from typing import Optional


class IStorageSlotRepository(ABC):
    """Storage slot repository interface - application layer"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get the blob stored under key, None if the slot is empty"""
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Create or overwrite the blob stored under key"""
        pass
