"""Account repository interface."""

from abc import abstractmethod

from app.domain.entities.account import Account
from app.domain.repositories.base import IRepository


class IAccountRepository(IRepository[Account]):
    """
    Account-specific repository interface.

    Besides lookups by email and by mailed token, it offers two
    compare-and-set writes. They persist an account's new state only if the
    stored token still equals the one the caller looked the account up by,
    so a single token cannot be consumed twice by concurrent requests.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None:
        """
        Find an account by its (normalized) email address.

        Args:
            email: The account's email

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """
        Check if an email is already registered.

        Args:
            email: The email to check

        Returns:
            True if email exists, False otherwise
        """
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Account | None:
        """Find the account holding this email verification token."""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str) -> Account | None:
        """Find the account holding this password reset token."""
        pass

    @abstractmethod
    async def claim_verification_token(self, account: Account, token: str) -> bool:
        """
        Persist the account's state if its stored verification token is `token`.

        Args:
            account: Entity carrying the new state
            token: Verification token the account was looked up by

        Returns:
            True if the row was updated, False if the token was already consumed
        """
        pass

    @abstractmethod
    async def claim_reset_token(self, account: Account, token: str) -> bool:
        """
        Persist the account's state if its stored reset token is `token`.

        Args:
            account: Entity carrying the new state
            token: Reset token the account was looked up by

        Returns:
            True if the row was updated, False if the token was already consumed
        """
        pass
