"""Unit of Work interface - domain layer."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.repositories.account_repository import IAccountRepository


class IUnitOfWork(ABC):
    """
    Unit of Work interface for managing transactions.

    The UoW acts as a facade providing access to all repositories
    within a single transactional boundary.
    """

    accounts: "IAccountRepository"

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        """Start a transaction/session."""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """
        Exit async context manager.

        If an exception escaped the block, roll back. Work that must survive
        an exception has to be committed explicitly before raising.
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass
