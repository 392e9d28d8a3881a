"""SQLAlchemy-backed Unit of Work for the account store."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.repositories.unit_of_work import IUnitOfWork
from app.infrastructure.repositories.account_repository_impl import AccountRepository


class UnitOfWork(IUnitOfWork):
    """
    One AsyncSession per `async with` block.

    Nothing is committed implicitly: workflows call commit() themselves,
    which lets them persist a cleared token before raising. An exception
    escaping the block rolls back whatever was not committed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> "UnitOfWork":
        self._session = self._session_factory()
        self.accounts = AccountRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is not None:
            await self.rollback()

        if self._session is not None:
            await self._session.close()
            self._session = None

    async def commit(self) -> None:
        if self._session is None:
            raise RuntimeError("Cannot commit outside an active unit of work")

        await self._session.commit()

    async def rollback(self) -> None:
        if self._session is None:
            raise RuntimeError("Cannot roll back outside an active unit of work")

        await self._session.rollback()
