from abc import ABC, abstractmethod
from typing import Callable

from tokenvault.app.repositories.storage_slot_repository import IStorageSlotRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    slots: IStorageSlotRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


UnitOfWorkFactory = Callable[[], UnitOfWork]
