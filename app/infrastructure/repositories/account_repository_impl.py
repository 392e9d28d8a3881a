"""Account repository implementation using SQLAlchemy."""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.account import Account, normalize_email
from app.domain.exceptions import DuplicateAccountException
from app.domain.repositories.account_repository import IAccountRepository
from app.infrastructure.persistence.models.account_model import AccountModel


class AccountRepository(IAccountRepository):
    """
    SQLAlchemy implementation of IAccountRepository.

    Returns domain entities, never exposing ORM models to the application
    layer. Token consumption goes through conditional UPDATE statements so
    the database, not the application, arbitrates concurrent claims.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with a database session.

        Args:
            session: SQLAlchemy async session (managed by UoW)
        """
        self._session = session

    async def get_by_id(self, id: int) -> Optional[Account]:
        """Get account by ID."""
        return await self._get_one(AccountModel.id == id)

    async def add(self, entity: Account) -> Account:
        """
        Add a new account.

        Raises:
            DuplicateAccountException: If the email (or a token) is already taken
        """
        account_model = AccountModel.from_entity(entity)

        self._session.add(account_model)
        try:
            await self._session.flush()  # Get generated ID without committing
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateAccountException() from exc
        await self._session.refresh(account_model)  # Refresh timestamps

        return account_model.to_entity()

    async def update(self, entity: Account) -> Account:
        """Update existing account."""
        if entity.id is None:
            raise ValueError("Cannot update account without ID")

        account_model = await self._session.get(AccountModel, entity.id)
        if account_model is None:
            raise ValueError(f"Account with ID {entity.id} not found")

        for field, value in AccountModel.mutable_values(entity).items():
            setattr(account_model, field, value)

        await self._session.flush()
        await self._session.refresh(account_model)

        return account_model.to_entity()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address."""
        return await self._get_one(AccountModel.email == normalize_email(email))

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self._session.execute(
            select(AccountModel.id).where(AccountModel.email == normalize_email(email))
        )
        return result.scalar_one_or_none() is not None

    async def get_by_verification_token(self, token: str) -> Optional[Account]:
        """Get account holding an email verification token."""
        return await self._get_one(AccountModel.email_verification_token == token)

    async def get_by_reset_token(self, token: str) -> Optional[Account]:
        """Get account holding a password reset token."""
        return await self._get_one(AccountModel.password_reset_token == token)

    async def claim_verification_token(self, account: Account, token: str) -> bool:
        """Persist account state only if it still holds the verification token."""
        return await self._conditional_update(
            account, AccountModel.email_verification_token == token
        )

    async def claim_reset_token(self, account: Account, token: str) -> bool:
        """Persist account state only if it still holds the reset token."""
        return await self._conditional_update(
            account, AccountModel.password_reset_token == token
        )

    async def _get_one(self, *criteria) -> Optional[Account]:
        result = await self._session.execute(select(AccountModel).where(*criteria))
        account_model = result.scalar_one_or_none()

        if account_model is None:
            return None

        return account_model.to_entity()

    async def _conditional_update(self, account: Account, token_matches) -> bool:
        if account.id is None:
            raise ValueError("Cannot update account without ID")

        result = await self._session.execute(
            update(AccountModel)
            .where(AccountModel.id == account.id, token_matches)
            .values(**AccountModel.mutable_values(account))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
