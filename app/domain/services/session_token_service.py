"""Session token service interface - domain layer abstraction.

A session token proves an authenticated identity on subsequent requests.
The domain requires that tokens:
1. Are bound to exactly one account id
2. Expire after a fixed lifetime
3. Cannot be forged without a server-held secret

Validation fails closed: anything that is not a well-formed, authentic,
unexpired token is reported as invalid (None), never as an exception.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class SessionClaims:
    """Decoded content of a valid session token."""

    account_id: int
    issued_at: datetime
    expires_at: datetime
    token_id: str | None = None

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) > self.expires_at


class ISessionTokenService(ABC):
    """Interface for issuing and validating session tokens."""

    @property
    @abstractmethod
    def lifetime_seconds(self) -> int:
        """Lifetime of newly issued tokens, in seconds."""
        pass

    @abstractmethod
    def issue(self, account_id: int) -> str:
        """
        Issue a session token for an account.

        Args:
            account_id: Identity the token is bound to

        Returns:
            Encoded token string
        """
        pass

    @abstractmethod
    def validate(self, token: str | None) -> SessionClaims | None:
        """
        Validate a session token.

        Args:
            token: Encoded token string (may be empty or None)

        Returns:
            SessionClaims if the token is authentic and unexpired, None otherwise
        """
        pass
