"""Generic repository contract shared by the account store."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """
    Lookup and write operations keyed by integer id.

    Accounts are never deleted by the auth subsystem, so there is no delete.
    """

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """Return the entity with this id, or None."""
        pass

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Persist a new entity and return it with its generated id and timestamps."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Overwrite the stored state of an existing entity."""
        pass
