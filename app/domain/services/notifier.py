"""Notification interface - the account-related email side channel.

Workflows treat every notification as best-effort: a failed send is logged
and never undoes or fails the state change that triggered it. Implementations
report failure through NotificationResult rather than by raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.domain.entities.account import Account


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a single notification attempt."""

    delivered: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "NotificationResult":
        return cls(delivered=True)

    @classmethod
    def failed(cls, error: str) -> "NotificationResult":
        return cls(delivered=False, error=error)


class INotifier(ABC):
    """Narrow capability interface: three verbs, nothing else."""

    @abstractmethod
    async def send_verification(self, account: Account, token: str) -> NotificationResult:
        """Send the email verification link for a freshly registered account."""
        pass

    @abstractmethod
    async def send_password_reset(self, account: Account, token: str) -> NotificationResult:
        """Send the password reset link."""
        pass

    @abstractmethod
    async def send_welcome(self, account: Account) -> NotificationResult:
        """Send the welcome message after successful verification."""
        pass
